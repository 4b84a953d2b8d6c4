"""
Authentication service: credential validation + caller identity.

Flow
────
1. The CLI builds a SessionManager, which resolves a boto3 session.
2. `validate_credentials` issues STS GetCallerIdentity; any rejection
   (expired keys, no network, permission denial) becomes AuthenticationError.
3. `fetch_caller_identity` issues the same call and returns the principal
   as a `CallerIdentity` record for display.
"""

import logging

from botocore.exceptions import BotoCoreError, ClientError

from vpchrono.cloud.base import NetworkProvider
from vpchrono.errors import AuthenticationError
from vpchrono.schemas.vpc import CallerIdentity

logger = logging.getLogger(__name__)


def _identity_call(provider: NetworkProvider, context: str) -> dict:
    try:
        return provider.get_caller_identity()
    except (ClientError, BotoCoreError) as exc:
        raise AuthenticationError(f"{context}: {exc}") from exc


def validate_credentials(provider: NetworkProvider) -> None:
    """Raise AuthenticationError unless the provider accepts our credentials."""
    _identity_call(provider, "failed to validate AWS credentials")
    logger.info("AWS credentials validated.")


def fetch_caller_identity(provider: NetworkProvider) -> CallerIdentity:
    payload = _identity_call(provider, "failed to get caller identity")
    identity = CallerIdentity(
        account=payload.get("Account", ""),
        arn=payload.get("Arn", ""),
        user_id=payload.get("UserId", ""),
    )
    logger.info("Authenticated as '%s' in account %s.", identity.arn, identity.account)
    return identity
