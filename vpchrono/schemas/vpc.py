"""
Pydantic models for the records vpchrono produces.

Every describe-VPCs entry and caller-identity payload is flattened into one of
these before it leaves the service layer, so the CLI never touches raw boto3
response dicts.
"""

from typing import Optional

from pydantic import BaseModel, Field, computed_field


class VPCRecord(BaseModel):
    """A single VPC, flattened from a DescribeVpcs entry."""

    vpc_id: str = Field(..., examples=["vpc-0a1b2c3d"])
    vpc_cidr: str = Field("", examples=["10.0.0.0/16"], description="Primary IPv4 CIDR block.")
    is_default: bool = False
    vpc_name: str = Field(
        "",
        examples=["prod"],
        description="Value of the `Name` tag, empty when the tag is absent.",
    )
    tags: dict[str, str] = Field(default_factory=dict)
    state: Optional[str] = None
    cidr_associations: list[str] = Field(default_factory=list)
    ipv6_cidr_associations: list[str] = Field(default_factory=list)


class CallerIdentity(BaseModel):
    """The authenticated principal as reported by STS GetCallerIdentity."""

    account: str
    arn: str
    user_id: str = ""


class VPCListResponse(BaseModel):
    """Returned by `list_all_vpcs` callers that need the region alongside."""

    region: str
    vpcs: list[VPCRecord]

    @computed_field
    @property
    def count(self) -> int:
        return len(self.vpcs)
