"""
VPC service layer: maps DescribeVpcs responses into flat records.

Each function receives a `NetworkProvider` instance (handed over by the
SessionManager).  The service has no knowledge of which provider is in use:
boto3, an in-memory fake, or any future alternative.
"""

import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from vpchrono.cloud.base import NetworkProvider, vpc_filter
from vpchrono.errors import LookupFailedError, NotFoundError
from vpchrono.schemas.vpc import VPCRecord

logger = logging.getLogger(__name__)


# ── Mapping helpers ───────────────────────────────────────────────────────────

def extract_tags(tags: Optional[list[dict]]) -> dict[str, str]:
    """Turn an EC2 ``[{"Key": ..., "Value": ...}]`` list into a plain mapping."""
    return {t.get("Key", ""): t.get("Value", "") for t in tags or []}


def to_record(vpc: dict) -> VPCRecord:
    """Flatten a single DescribeVpcs entry into a `VPCRecord`."""
    tags = extract_tags(vpc.get("Tags"))
    return VPCRecord(
        vpc_id=vpc.get("VpcId", ""),
        vpc_cidr=vpc.get("CidrBlock", ""),
        is_default=bool(vpc.get("IsDefault", False)),
        vpc_name=tags.get("Name", ""),
        tags=tags,
        state=vpc.get("State"),
        cidr_associations=[
            a["CidrBlock"]
            for a in vpc.get("CidrBlockAssociationSet", [])
            if a.get("CidrBlock")
        ],
        ipv6_cidr_associations=[
            a["Ipv6CidrBlock"]
            for a in vpc.get("Ipv6CidrBlockAssociationSet", [])
            if a.get("Ipv6CidrBlock")
        ],
    )


def _describe(provider: NetworkProvider, context: str, filters=None) -> list[dict]:
    try:
        return provider.describe_vpcs(filters)
    except (ClientError, BotoCoreError) as exc:
        raise LookupFailedError(f"{context}: {exc}") from exc


# ── Lookups ───────────────────────────────────────────────────────────────────

def list_all_vpcs(provider: NetworkProvider) -> list[VPCRecord]:
    """
    Return every VPC in the provider's region, in provider order.

    Raises
    ------
    LookupFailedError
        The DescribeVpcs call failed.
    """
    vpcs = _describe(provider, "failed to describe VPCs")
    records = [to_record(v) for v in vpcs]
    logger.info("Listed %d VPC(s) in %s.", len(records), provider.region)
    return records


def get_vpc_by_id(vpc_id: str, provider: NetworkProvider) -> VPCRecord:
    """
    Retrieve a single VPC by id.

    Only an entry whose ``VpcId`` equals *vpc_id* is accepted, so a provider
    that ignores the filter can never hand back the wrong VPC.
    """
    vpcs = _describe(
        provider, f"failed to describe VPC {vpc_id}", vpc_filter("vpc-id", vpc_id)
    )
    for vpc in vpcs:
        if vpc.get("VpcId") == vpc_id:
            return to_record(vpc)
    raise NotFoundError(f"VPC {vpc_id} not found")


def get_default_vpc(provider: NetworkProvider) -> VPCRecord:
    """
    Retrieve the region's default VPC.

    A region has at most one default VPC; should the API ever return more,
    the first one wins.
    """
    vpcs = _describe(
        provider, "failed to describe VPCs", vpc_filter("isDefault", "true")
    )
    if not vpcs:
        raise NotFoundError(f"no default VPC found in region {provider.region}")
    if len(vpcs) > 1:
        logger.warning(
            "%d VPCs flagged as default in %s; using %s.",
            len(vpcs),
            provider.region,
            vpcs[0].get("VpcId"),
        )
    return to_record(vpcs[0])
