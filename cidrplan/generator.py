"""Kubernetes network plan generation.

Carves a VPC into public subnets, private subnets, a pod CIDR and a service
CIDR for a deployment tier. Blocks are handed out in that order from the VPC
base address, each one starting where the previous one ended (rounded up to
its own size so it is a valid network address). Sequential placement is what
guarantees that no two blocks overlap.

Pod and service ranges are not constrained to the VPC block. They behave like
secondary ranges (GKE alias ranges, AWS secondary CIDRs) and can land past
the end of the VPC.
"""

import random
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from .errors import (
    AddressSpaceExhaustedError,
    InvalidPlanRequestError,
    PlanAssemblyInvariantViolationError,
    PublicAddressRejectedError,
    VpcTooSmallError,
)
from .models.network_plan import PLAN_VERSION, NetworkPlan, NetworkPlanRequest, SubnetType
from .subnet_utils import MAX_ADDRESS, calculate_subnet, int_to_address, is_private_address, parse_address
from .tiers import (
    DeploymentTier,
    availability_zones,
    get_deployment_tier,
    get_deployment_tier_info,
    get_provider_scheme,
    normalize_provider,
)

RFC1918_RANGES = ("10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16")

# Prefix used for randomly generated VPC blocks
RANDOM_VPC_PREFIX = 16


class AddressAllocator:
    """Hands out consecutive, non-overlapping CIDR blocks from a base address."""

    def __init__(self, base: int):
        self.cursor = base

    def allocate(self, prefix: int) -> str:
        """Allocate the next block of the given prefix length.

        Raises:
            AddressSpaceExhaustedError: If the block would end past 255.255.255.255
        """
        size = 1 << (32 - prefix)
        start = (self.cursor + size - 1) // size * size
        end = start + size - 1

        if end > MAX_ADDRESS:
            raise AddressSpaceExhaustedError(
                f"Cannot allocate a /{prefix} block after {int_to_address(min(self.cursor, MAX_ADDRESS))}: "
                "allocation runs past 255.255.255.255"
            )

        self.cursor = end + 1
        return calculate_subnet(f"{int_to_address(start)}/{prefix}").cidr


def generate_random_rfc1918_vpc(rng: random.Random | None = None) -> str:
    """Pick a random /16 from one of the three RFC 1918 ranges.

    Returns one of 10.X.0.0/16, 172.[16-31].0.0/16 or 192.168.0.0/16.
    """
    rng = rng or random.Random()

    choice = rng.randrange(len(RFC1918_RANGES))
    if choice == 0:
        return f"10.{rng.randrange(256)}.0.0/{RANDOM_VPC_PREFIX}"
    if choice == 1:
        return f"172.{16 + rng.randrange(16)}.0.0/{RANDOM_VPC_PREFIX}"
    return f"192.168.0.0/{RANDOM_VPC_PREFIX}"


def normalize_vpc_cidr(vpc_cidr: str) -> str:
    """Validate a VPC CIDR is RFC 1918 private and return its canonical form.

    Both the first and the last address of the block must be private, so a
    block that only starts in private space (10.0.0.0/7) is rejected.

    Raises:
        InvalidCidrFormatError, InvalidPrefixError, InvalidAddressError: If malformed
        PublicAddressRejectedError: If any part of the block is public
    """
    subnet = calculate_subnet(vpc_cidr)

    if not (is_private_address(subnet.network_address) and is_private_address(subnet.broadcast_address)):
        raise PublicAddressRejectedError(
            f'VPC CIDR "{vpc_cidr}" uses public IP space. Kubernetes deployments must use private '
            f"RFC 1918 ranges: {', '.join(RFC1918_RANGES)}."
        )

    return subnet.cidr


def check_vpc_capacity(vpc_prefix: int, tier: DeploymentTier, tier_name: str) -> None:
    """Raise VpcTooSmallError if the VPC cannot hold the tier's subnets."""
    for subnet_type, subnet_size in (
        (SubnetType.PUBLIC, tier.public_subnet_size),
        (SubnetType.PRIVATE, tier.private_subnet_size),
    ):
        if vpc_prefix >= subnet_size:
            raise VpcTooSmallError(
                f"VPC prefix /{vpc_prefix} is too small. Cannot split into /{subnet_size} {subnet_type.value} subnets"
            )

    if vpc_prefix > tier.min_vpc_prefix:
        raise VpcTooSmallError(
            f"VPC prefix /{vpc_prefix} is too small for the {tier_name} tier "
            f"(requires /{tier.min_vpc_prefix} or larger)"
        )


def _allocate_subnets(
    allocator: AddressAllocator,
    count: int,
    prefix: int,
    subnet_type: SubnetType,
    provider: str,
    region: str,
) -> list[dict[str, Any]]:
    zones = availability_zones(count, provider, region)
    return [
        {
            "cidr": allocator.allocate(prefix),
            "name": f"{subnet_type.value}-{i + 1}",
            "type": subnet_type,
            "availability_zone": zones[i],
        }
        for i in range(count)
    ]


def generate_network_plan(
    request: NetworkPlanRequest | Mapping[str, Any],
    *,
    rng: random.Random | None = None,
    clock: Callable[[], datetime] | None = None,
) -> NetworkPlan:
    """Generate a complete Kubernetes network plan.

    Args:
        request: Plan request, or a mapping with deploymentSize, provider,
            vpcCidr, region and deploymentName (snake_case also accepted)
        rng: Random source used when no VPC CIDR is supplied
        clock: Returns the generation timestamp (default: now, UTC)

    Returns:
        NetworkPlan with non-overlapping public, private, pod and service ranges

    Raises:
        InvalidPlanRequestError: If a mapping request is missing or mistypes a field
        CidrPlanError: Any other validation failure (see cidrplan.errors)
        PlanAssemblyInvariantViolationError: If the assembled plan is inconsistent
    """
    if not isinstance(request, NetworkPlanRequest):
        try:
            request = NetworkPlanRequest.model_validate(request)
        except ValidationError as e:
            raise InvalidPlanRequestError(f"Invalid network plan request: {e}") from e

    if request.vpc_cidr:
        vpc_cidr = normalize_vpc_cidr(request.vpc_cidr)
    else:
        vpc_cidr = generate_random_rfc1918_vpc(rng)

    tier_name = request.deployment_size.strip().lower()
    tier = get_deployment_tier(tier_name)

    provider = normalize_provider(request.provider)
    region = request.region or get_provider_scheme(provider).default_region

    vpc = calculate_subnet(vpc_cidr)
    check_vpc_capacity(vpc.prefix, tier, tier_name)

    allocator = AddressAllocator(parse_address(vpc.network_address))
    public = _allocate_subnets(
        allocator, tier.public_subnets, tier.public_subnet_size, SubnetType.PUBLIC, provider, region
    )
    private = _allocate_subnets(
        allocator, tier.private_subnets, tier.private_subnet_size, SubnetType.PRIVATE, provider, region
    )
    pods_cidr = allocator.allocate(tier.pods_prefix)
    services_cidr = allocator.allocate(tier.services_prefix)

    generated_at = (clock or (lambda: datetime.now(UTC)))()

    plan = {
        "deployment_size": tier_name,
        "provider": provider,
        "region": region,
        "deployment_name": request.deployment_name,
        "vpc": {"cidr": vpc.cidr},
        "subnets": {"public": public, "private": private},
        "pods": {"cidr": pods_cidr},
        "services": {"cidr": services_cidr},
        "metadata": {"generated_at": generated_at.isoformat(), "version": PLAN_VERSION},
    }

    try:
        return NetworkPlan.model_validate(plan)
    except ValidationError as e:
        raise PlanAssemblyInvariantViolationError(f"Generated network plan failed validation: {e}") from e


def list_deployment_tiers(size: str | None = None) -> dict:
    """Return one deployment tier or all of them (see tiers.get_deployment_tier_info)."""
    return get_deployment_tier_info(size)
