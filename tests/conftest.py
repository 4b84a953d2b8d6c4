import sys
from pathlib import Path
from typing import Optional

import boto3
import pytest
from botocore.exceptions import ClientError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from vpchrono.cloud.base import NetworkProvider
from vpchrono.cloud.session import SessionManager
from vpchrono.config import get_settings


IDENTITY = {
    "UserId": "AIDAEXAMPLE",
    "Account": "123456789012",
    "Arn": "arn:aws:iam::123456789012:user/tester",
}

SCENARIO_VPCS = [
    {
        "VpcId": "vpc-1",
        "CidrBlock": "10.0.0.0/16",
        "IsDefault": True,
        "State": "available",
        "Tags": [{"Key": "Name", "Value": "prod"}],
    },
    {
        "VpcId": "vpc-2",
        "CidrBlock": "172.31.0.0/16",
        "IsDefault": False,
        "State": "available",
        "Tags": [],
    },
]


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": f"{code} raised"}}, operation)


class FakeProvider(NetworkProvider):
    """In-memory NetworkProvider that applies vpc-id / isDefault filters."""

    def __init__(self, vpcs=None, region="us-west-2", identity=None, apply_filters=True):
        self._region = region
        self.vpcs = list(vpcs or [])
        self.identity = identity or dict(IDENTITY)
        self.apply_filters = apply_filters
        self.describe_error: Optional[Exception] = None
        self.filtered_describe_error: Optional[Exception] = None
        self.identity_error: Optional[Exception] = None
        self.calls: list = []

    @property
    def region(self) -> str:
        return self._region

    def describe_vpcs(self, filters=None):
        self.calls.append(("describe_vpcs", filters))
        if self.describe_error is not None:
            raise self.describe_error
        if filters and self.filtered_describe_error is not None:
            raise self.filtered_describe_error
        result = list(self.vpcs)
        if self.apply_filters:
            for f in filters or []:
                if f["Name"] == "vpc-id":
                    result = [v for v in result if v.get("VpcId") in f["Values"]]
                elif f["Name"] == "isDefault":
                    wanted = f["Values"] == ["true"]
                    result = [v for v in result if bool(v.get("IsDefault")) == wanted]
        return result

    def get_caller_identity(self):
        self.calls.append(("get_caller_identity", None))
        if self.identity_error is not None:
            raise self.identity_error
        return self.identity


def fake_keys_source(region, profile):
    return boto3.Session(
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        region_name=region,
    )


@pytest.fixture(autouse=True)
def fresh_settings():
    """Rebuild Settings from the (monkeypatched) environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def provider():
    return FakeProvider(vpcs=SCENARIO_VPCS)


@pytest.fixture()
def session_factory(provider):
    """Build SessionManagers that use dummy keys and the in-memory provider."""

    def _factory(region, profile=None):
        return SessionManager(
            region,
            profile,
            sources=[fake_keys_source],
            provider_factory=lambda sm: provider,
        )

    return _factory
