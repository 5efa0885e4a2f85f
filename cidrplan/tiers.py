"""Deployment tier and cloud provider configuration.

Static tables only. Nothing here is mutated at runtime, which keeps plan
generation a pure function of its inputs.

Provider zone naming conventions:

AWS (EKS):
  - Region format: us-east-1, eu-west-2
  - AZ format: {region}{letter} (us-east-1a) - no hyphen before the letter

GCP (GKE):
  - Region format: us-central1, europe-west1
  - Zone format: {region}-{letter} (us-central1-a)

Azure (AKS) and generic Kubernetes:
  - Region format: eastus, westeurope / region-1
  - Zone format: {region}-{number} (eastus-1), at most 3 zones
"""

from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .errors import UnknownDeploymentSizeError, UnknownProviderError


class DeploymentTier(BaseModel):
    """Subnet counts and prefix lengths for one deployment size."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    public_subnets: int
    private_subnets: int
    public_subnet_size: int  # prefix length, e.g. 25 for /25
    private_subnet_size: int
    pods_prefix: int
    services_prefix: int
    min_vpc_prefix: int
    description: str


class ZoneStyle(str, Enum):
    """How availability zone labels are derived from a region."""

    LETTER_SUFFIX = "letter-suffix"  # us-east-1a
    HYPHEN_LETTER = "hyphen-letter"  # us-central1-a
    HYPHEN_NUMBER = "hyphen-number"  # eastus-1


class ProviderScheme(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: str
    zone_style: ZoneStyle
    default_region: str
    regions: tuple[str, ...]
    format: str


DEPLOYMENT_TIER_CONFIGS = MappingProxyType(
    {
        "micro": DeploymentTier(
            public_subnets=1,
            private_subnets=1,
            public_subnet_size=26,  # 64 addresses, 1 NAT + LB
            private_subnet_size=25,  # 128 addresses, 1 node
            pods_prefix=20,  # 4,096 pod IPs
            services_prefix=16,
            min_vpc_prefix=24,
            description="Single Node: 1 node, minimal subnet allocation (proof of concept)",
        ),
        "standard": DeploymentTier(
            public_subnets=1,
            private_subnets=1,
            public_subnet_size=25,
            private_subnet_size=24,  # 1-3 nodes
            pods_prefix=16,  # 65,536 pod IPs
            services_prefix=16,
            min_vpc_prefix=23,
            description="Development/Testing: 1-3 nodes, minimal subnet allocation",
        ),
        "professional": DeploymentTier(
            public_subnets=2,
            private_subnets=2,
            public_subnet_size=25,
            private_subnet_size=23,  # 512 addresses per private subnet
            pods_prefix=18,  # 10 nodes x 110 pods + 50% buffer
            services_prefix=16,
            min_vpc_prefix=21,
            description="Small Production: 3-10 nodes, dual AZ ready",
        ),
        "enterprise": DeploymentTier(
            public_subnets=3,
            private_subnets=3,
            public_subnet_size=24,
            private_subnet_size=21,  # 2,048 addresses per private subnet
            pods_prefix=16,  # 50 nodes x 110 pods + 50% buffer
            services_prefix=16,
            min_vpc_prefix=18,
            description="Large Production: 10-50 nodes, triple AZ ready with HA",
        ),
        "hyperscale": DeploymentTier(
            public_subnets=3,
            private_subnets=3,
            public_subnet_size=23,  # NAT, LB, bastion
            private_subnet_size=20,  # high node density
            pods_prefix=13,  # 524,288 pod IPs, 5000 nodes x 110 pods
            services_prefix=16,
            min_vpc_prefix=18,  # aligned layout: last /20 ends on the /18 boundary
            description="Global Scale: 50-5000 nodes, multi-region ready (EKS/GKE max)",
        ),
    }
)

PROVIDER_SCHEMES = MappingProxyType(
    {
        "eks": ProviderScheme(
            name="eks",
            zone_style=ZoneStyle.LETTER_SUFFIX,
            default_region="us-east-1",
            regions=(
                "us-east-1",
                "us-east-2",
                "us-west-1",
                "us-west-2",
                "eu-west-1",
                "eu-west-2",
                "eu-central-1",
                "ap-southeast-1",
                "ap-northeast-1",
                "ap-south-1",
                "sa-east-1",
                "ca-central-1",
            ),
            format="{region}{letter} (e.g., us-east-1a, us-east-1b, eu-west-1c)",
        ),
        "gke": ProviderScheme(
            name="gke",
            zone_style=ZoneStyle.HYPHEN_LETTER,
            default_region="us-central1",
            regions=(
                "us-central1",
                "us-east1",
                "us-east4",
                "us-west1",
                "us-west2",
                "europe-west1",
                "europe-west2",
                "europe-west4",
                "asia-east1",
                "asia-southeast1",
                "asia-northeast1",
                "australia-southeast1",
            ),
            format="{region}-{letter} (e.g., us-central1-a, us-central1-b, europe-west1-c)",
        ),
        "aks": ProviderScheme(
            name="aks",
            zone_style=ZoneStyle.HYPHEN_NUMBER,
            default_region="eastus",
            regions=(
                "eastus",
                "eastus2",
                "westus",
                "westus2",
                "westus3",
                "centralus",
                "northcentralus",
                "southcentralus",
                "northeurope",
                "westeurope",
                "uksouth",
                "southeastasia",
                "australiaeast",
                "japaneast",
            ),
            format="{region}-{zone} (e.g., eastus-1, eastus-2, westeurope-3)",
        ),
        "kubernetes": ProviderScheme(
            name="kubernetes",
            zone_style=ZoneStyle.HYPHEN_NUMBER,
            default_region="region-1",
            regions=("region-1", "datacenter-1", "zone-1"),
            format="{region}-{zone} (e.g., region-1-1, region-1-2)",
        ),
    }
)

PROVIDER_ALIASES = MappingProxyType({"k8s": "kubernetes"})

DEFAULT_PROVIDER = "kubernetes"

ZONE_LETTERS = ("a", "b", "c", "d", "e", "f", "g", "h")
NUMERIC_ZONE_COUNT = 3


def get_deployment_tier(name: str) -> DeploymentTier:
    """Look up a deployment tier by name.

    Raises:
        UnknownDeploymentSizeError: If the tier does not exist
    """
    tier = DEPLOYMENT_TIER_CONFIGS.get(name)
    if tier is None:
        valid = ", ".join(DEPLOYMENT_TIER_CONFIGS)
        raise UnknownDeploymentSizeError(f"Unknown deployment size: '{name}'. Must be one of: {valid}")
    return tier


def get_deployment_tier_info(size: str | None = None) -> dict:
    """Return one tier's configuration, or every tier keyed by name.

    Args:
        size: Optional tier name

    Returns:
        {"size": name, ...config} for a single tier, otherwise
        {name: config} for all tiers

    Raises:
        UnknownDeploymentSizeError: If ``size`` is given and unknown
    """
    if size is not None:
        tier = get_deployment_tier(size)
        return {"size": size, **tier.model_dump(by_alias=True)}

    return {name: tier.model_dump(by_alias=True) for name, tier in DEPLOYMENT_TIER_CONFIGS.items()}


def normalize_provider(provider: str | None) -> str:
    """Resolve a provider name or alias ("k8s", "EKS") to its canonical name.

    Raises:
        UnknownProviderError: If the provider is not recognised
    """
    if provider is None:
        return DEFAULT_PROVIDER

    name = provider.strip().lower()
    name = PROVIDER_ALIASES.get(name, name)
    if name not in PROVIDER_SCHEMES:
        valid = ", ".join([*PROVIDER_SCHEMES, *PROVIDER_ALIASES])
        raise UnknownProviderError(f"Unknown provider: '{provider}'. Must be one of: {valid}")
    return name


def get_provider_scheme(provider: str | None) -> ProviderScheme:
    return PROVIDER_SCHEMES[normalize_provider(provider)]


def availability_zones(count: int, provider: str | None, region: str | None = None) -> list[str]:
    """Generate availability zone labels for ``count`` subnets.

    Labels cycle when ``count`` exceeds the provider's zone set, so the same
    label may appear on several subnets. They are advisory only.
    """
    scheme = get_provider_scheme(provider)
    region = region or scheme.default_region

    zones = []
    for i in range(count):
        if scheme.zone_style == ZoneStyle.LETTER_SUFFIX:
            zones.append(f"{region}{ZONE_LETTERS[i % len(ZONE_LETTERS)]}")
        elif scheme.zone_style == ZoneStyle.HYPHEN_LETTER:
            zones.append(f"{region}-{ZONE_LETTERS[i % len(ZONE_LETTERS)]}")
        else:
            zones.append(f"{region}-{(i % NUMERIC_ZONE_COUNT) + 1}")
    return zones
