"""
Abstract network provider for VPC lookups.

`NetworkProvider` is the narrow contract the service layer depends on: the
two read-only calls vpchrono needs, and nothing else.  The boto3-backed
implementation lives in `vpchrono.cloud.aws`; tests supply an in-memory fake
without the service layer knowing which one is in use.
"""

from abc import ABC, abstractmethod
from typing import Optional


def vpc_filter(name: str, *values: str) -> list[dict]:
    """Build a single-entry Filters list understood by the EC2 API."""
    return [{"Name": name, "Values": list(values)}]


class NetworkProvider(ABC):
    """Read-only access to a region's VPCs and the caller's identity."""

    @property
    @abstractmethod
    def region(self) -> str:
        """The region every call is made against."""

    @abstractmethod
    def describe_vpcs(self, filters: Optional[list[dict]] = None) -> list[dict]:
        """
        Return the raw ``Vpcs`` entries matching *filters*.

        Parameters
        ----------
        filters : list[dict], optional
            EC2-style filters, e.g. ``[{"Name": "isDefault", "Values": ["true"]}]``.
            ``None`` means no filtering.

        Transport and provider errors propagate unchanged.
        """

    @abstractmethod
    def get_caller_identity(self) -> dict:
        """Return the raw GetCallerIdentity payload (``Account``, ``Arn``, ``UserId``)."""
