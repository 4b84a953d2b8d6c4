"""
Session management: credential resolution and typed sub-clients.

Credential discovery is an explicit, ordered policy rather than ambient
behaviour: `resolve_session` walks a sequence of sources and returns the
first boto3 session one of them produces.

Sources
───────
  profile_source        named profile from the shared config files
  static_keys_source    access keys from application settings (.env / env)
  default_chain_source  botocore's default chain (env, files, metadata)

A source returns ``None`` when it has nothing to offer.  A source that raises
aborts resolution: a profile that was asked for but is broken must not fall
through to some other set of credentials.
"""

import logging
from typing import Callable, Optional, Sequence

import boto3
from botocore.exceptions import BotoCoreError

from vpchrono.cloud.aws import AwsNetworkProvider
from vpchrono.cloud.base import NetworkProvider
from vpchrono.config import get_settings
from vpchrono.errors import ConfigurationError
from vpchrono.schemas.vpc import CallerIdentity
from vpchrono.services import auth

logger = logging.getLogger(__name__)

CredentialSource = Callable[[str, Optional[str]], Optional[boto3.Session]]


# ── Credential sources ────────────────────────────────────────────────────────

def profile_source(region: str, profile: Optional[str]) -> Optional[boto3.Session]:
    """Session for the named *profile*; raises ProfileNotFound if it is unknown."""
    if not profile:
        return None
    return boto3.Session(profile_name=profile, region_name=region)


def static_keys_source(region: str, profile: Optional[str]) -> Optional[boto3.Session]:
    """Session built from the access keys in application settings, if any."""
    settings = get_settings()
    if not settings.has_static_keys():
        return None
    return boto3.Session(
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        aws_session_token=settings.aws_session_token or None,
        region_name=region,
    )


def default_chain_source(region: str, profile: Optional[str]) -> Optional[boto3.Session]:
    """Session from botocore's default chain, or None when it finds no credentials."""
    session = boto3.Session(region_name=region)
    if session.get_credentials() is None:
        return None
    return session


DEFAULT_CREDENTIAL_SOURCES: tuple = (
    profile_source,
    static_keys_source,
    default_chain_source,
)


def resolve_session(
    region: str,
    profile: Optional[str] = None,
    sources: Sequence[CredentialSource] = DEFAULT_CREDENTIAL_SOURCES,
) -> boto3.Session:
    """
    Return the session produced by the first source that yields one.

    Raises
    ------
    ConfigurationError
        A source failed (unknown profile, partial keys, unparsable config)
        or none of them produced credentials.
    """
    for source in sources:
        name = getattr(source, "__name__", repr(source))
        try:
            session = source(region, profile)
        except BotoCoreError as exc:
            raise ConfigurationError(
                f"failed to load AWS configuration from {name}: {exc}"
            ) from exc
        if session is not None:
            logger.info("Resolved AWS session for %s via %s.", region, name)
            return session
        logger.debug("Credential source %s had nothing for %s.", name, region)

    raise ConfigurationError(f"failed to load AWS configuration: no credentials found for region {region}")


# ── Session manager ───────────────────────────────────────────────────────────

class SessionManager:
    """
    Holds the region/profile pair and hands out clients bound to it.

    Clients are created on first access and reused for the lifetime of the
    manager.  Use `with_region` to work against another region; the manager
    itself never changes region.
    """

    def __init__(
        self,
        region: str,
        profile: Optional[str] = None,
        sources: Sequence[CredentialSource] = DEFAULT_CREDENTIAL_SOURCES,
        provider_factory: Callable[["SessionManager"], NetworkProvider] = AwsNetworkProvider,
    ) -> None:
        self._region = region
        self._profile = profile or None
        self._sources = tuple(sources)
        self._provider_factory = provider_factory
        self._session = resolve_session(region, self._profile, self._sources)
        self._clients: dict = {}
        self._provider: Optional[NetworkProvider] = None

    def __repr__(self) -> str:
        return f"SessionManager(region={self._region!r}, profile={self._profile!r})"

    @property
    def region(self) -> str:
        return self._region

    @property
    def profile(self) -> Optional[str]:
        return self._profile

    # ── Clients ───────────────────────────────────────────────────────────────

    def _client(self, service: str):
        if service not in self._clients:
            self._clients[service] = self._session.client(service, region_name=self._region)
        return self._clients[service]

    def compute_client(self):
        """EC2 client for this region."""
        return self._client("ec2")

    def storage_client(self):
        """S3 client for this region."""
        return self._client("s3")

    def identity_client(self):
        """STS client for this region."""
        return self._client("sts")

    def provider(self) -> NetworkProvider:
        if self._provider is None:
            self._provider = self._provider_factory(self)
        return self._provider

    # ── Identity ──────────────────────────────────────────────────────────────

    def validate_credentials(self) -> None:
        auth.validate_credentials(self.provider())

    def caller_identity(self) -> CallerIdentity:
        return auth.fetch_caller_identity(self.provider())

    def with_region(self, region: str) -> "SessionManager":
        """Return a new manager for *region* with the same profile and sources."""
        return SessionManager(
            region,
            self._profile,
            sources=self._sources,
            provider_factory=self._provider_factory,
        )
