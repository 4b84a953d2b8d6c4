"""
Entry point for the vpchrono command-line tool.

Run locally:
    vpchrono                 # us-east-1, or AWS_REGION from the environment
    vpchrono us-west-2
    python -m vpchrono.main eu-central-1

Validates the configured AWS credentials, prints the caller identity, lists
every VPC in the region and shows the default VPC if there is one.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from vpchrono.cloud.session import SessionManager
from vpchrono.config import Settings, get_settings
from vpchrono.errors import VpchronoError, NotFoundError
from vpchrono.schemas.vpc import CallerIdentity, VPCListResponse, VPCRecord
from vpchrono.services.vpc import get_default_vpc, list_all_vpcs

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vpchrono",
        description="Validates AWS credentials and lists the VPCs in a region",
    )
    parser.add_argument(
        "region",
        nargs="?",
        default=settings.aws_region,
        help=f"AWS region to inspect. If omitted, defaults to {settings.aws_region}",
    )
    return parser


# ── Rendering ─────────────────────────────────────────────────────────────────

def format_identity(identity: CallerIdentity) -> str:
    return f"Authenticated as: {identity.arn}\nAccount ID: {identity.account}\n"


def format_vpc_list(listing: VPCListResponse) -> str:
    lines = [f"\nFound {listing.count} VPCs in region {listing.region}:"]
    for idx, vpc in enumerate(listing.vpcs, start=1):
        lines.append(f"{idx}. VPC ID: {vpc.vpc_id}")
        lines.append(f"   Name: {vpc.vpc_name}")
        lines.append(f"   CIDR Block: {vpc.vpc_cidr}")
        lines.append(f"   Is Default: {str(vpc.is_default).lower()}")
        lines.append("")
    return "\n".join(lines) + "\n"


def format_default_vpc(vpc: VPCRecord) -> str:
    return (
        "Default VPC Information:\n"
        f"   VPC ID: {vpc.vpc_id}\n"
        f"   Name: {vpc.vpc_name}\n"
        f"   CIDR Block: {vpc.vpc_cidr}\n"
    )


def _fatal(context: str, exc: Exception) -> int:
    logger.debug("%s", context, exc_info=exc)
    print(f"{context}: {exc}", file=sys.stderr)
    return 1


# ── Main flow ─────────────────────────────────────────────────────────────────

def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    args = build_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    try:
        session = SessionManager(args.region, settings.aws_profile or None)
    except VpchronoError as exc:
        return _fatal("Failed to create session manager", exc)

    try:
        session.validate_credentials()
    except VpchronoError as exc:
        return _fatal("Invalid AWS credentials", exc)

    try:
        identity = session.caller_identity()
    except VpchronoError as exc:
        return _fatal("Failed to get caller identity", exc)
    sys.stdout.write(format_identity(identity))

    try:
        vpcs = list_all_vpcs(session.provider())
    except VpchronoError as exc:
        return _fatal("Failed to get VPCs", exc)
    listing = VPCListResponse(region=session.region, vpcs=vpcs)
    sys.stdout.write(format_vpc_list(listing))

    try:
        default_vpc = get_default_vpc(session.provider())
    except NotFoundError as exc:
        sys.stdout.write(f"No default VPC found: {exc}\n")
    except VpchronoError as exc:
        return _fatal("Failed to get default VPC", exc)
    else:
        sys.stdout.write(format_default_vpc(default_vpc))

    return 0


if __name__ == "__main__":
    sys.exit(main())
