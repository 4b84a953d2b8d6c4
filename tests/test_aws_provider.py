import pytest
from botocore.exceptions import ClientError
from botocore.stub import Stubber

from conftest import IDENTITY, fake_keys_source
from vpchrono.cloud.aws import AwsNetworkProvider
from vpchrono.cloud.session import SessionManager


@pytest.fixture()
def session():
    return SessionManager("us-west-2", sources=[fake_keys_source])


def test_describe_vpcs_walks_every_page(session):
    provider = AwsNetworkProvider(session)
    ec2 = session.compute_client()

    with Stubber(ec2) as stub:
        stub.add_response(
            "describe_vpcs",
            {
                "Vpcs": [{"VpcId": "vpc-1", "CidrBlock": "10.0.0.0/16", "IsDefault": True}],
                "NextToken": "page-2",
            },
            {},
        )
        stub.add_response(
            "describe_vpcs",
            {"Vpcs": [{"VpcId": "vpc-2", "CidrBlock": "172.31.0.0/16", "IsDefault": False}]},
            {"NextToken": "page-2"},
        )

        vpcs = provider.describe_vpcs()

        stub.assert_no_pending_responses()

    assert [v["VpcId"] for v in vpcs] == ["vpc-1", "vpc-2"]


def test_describe_vpcs_passes_filters(session):
    provider = AwsNetworkProvider(session)
    filters = [{"Name": "isDefault", "Values": ["true"]}]

    with Stubber(session.compute_client()) as stub:
        stub.add_response("describe_vpcs", {"Vpcs": []}, {"Filters": filters})
        assert provider.describe_vpcs(filters) == []


def test_describe_vpcs_reraises_client_error(session):
    provider = AwsNetworkProvider(session)

    with Stubber(session.compute_client()) as stub:
        stub.add_client_error("describe_vpcs", service_error_code="UnauthorizedOperation")
        with pytest.raises(ClientError):
            provider.describe_vpcs()


def test_get_caller_identity(session):
    provider = AwsNetworkProvider(session)

    with Stubber(session.identity_client()) as stub:
        stub.add_response("get_caller_identity", IDENTITY, {})
        assert provider.get_caller_identity()["Account"] == "123456789012"


def test_region_comes_from_session(session):
    assert AwsNetworkProvider(session).region == "us-west-2"
