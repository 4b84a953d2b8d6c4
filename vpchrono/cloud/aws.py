"""
boto3 implementation of NetworkProvider.

All EC2/STS specifics live here (client access, pagination, error
logging), so the service layer stays SDK-agnostic.  Clients are borrowed from
the owning SessionManager, which holds the credentials and region.
"""

import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from vpchrono.cloud.base import NetworkProvider

logger = logging.getLogger(__name__)


class AwsNetworkProvider(NetworkProvider):
    """
    NetworkProvider backed by the EC2 and STS APIs.

    The instance holds no state of its own beyond the session manager it was
    created from.
    """

    def __init__(self, session_manager) -> None:
        self._session_manager = session_manager

    @property
    def region(self) -> str:
        return self._session_manager.region

    def describe_vpcs(self, filters: Optional[list[dict]] = None) -> list[dict]:
        """
        Call DescribeVpcs and return every matching entry.

        Pages are walked with the ``describe_vpcs`` paginator, so the result
        covers the whole region regardless of page size.
        """
        ec2 = self._session_manager.compute_client()
        kwargs: dict = {}
        if filters:
            kwargs["Filters"] = filters

        vpcs: list[dict] = []
        try:
            paginator = ec2.get_paginator("describe_vpcs")
            for page in paginator.paginate(**kwargs):
                vpcs.extend(page.get("Vpcs", []))
        except (ClientError, BotoCoreError) as exc:
            logger.error("DescribeVpcs failed in %s: %s", self.region, exc)
            raise

        logger.info("DescribeVpcs returned %d VPC(s) in %s.", len(vpcs), self.region)
        return vpcs

    def get_caller_identity(self) -> dict:
        sts = self._session_manager.identity_client()
        try:
            return sts.get_caller_identity()
        except (ClientError, BotoCoreError) as exc:
            logger.error("GetCallerIdentity failed: %s", exc)
            raise
