"""Pydantic models for Kubernetes network planning.

Pod networking notes:

- EKS with the default VPC CNI shares node subnet IPs with pods. The separate
  pod CIDR produced here needs a custom CNI (Calico, Cilium) or a secondary
  VPC CIDR block.
- GKE uses alias IP ranges for pods; AKS CNI overlay uses an overlay CIDR.
- Services always use a separate ClusterIP range, immutable after cluster
  creation.
"""

from enum import Enum
from itertools import combinations
from typing import Annotated, Literal

from pydantic import AfterValidator, Field, field_validator, model_validator

from ..subnet_utils import calculate_subnet, ranges_overlap
from ..tiers import DEFAULT_PROVIDER, DEPLOYMENT_TIER_CONFIGS
from .subnet import CamelModel

PLAN_VERSION = "1.0"


def _canonical_cidr(value: str) -> str:
    canonical = calculate_subnet(value).cidr
    if canonical != value:
        raise ValueError(f"CIDR {value} is not a network address (expected {canonical})")
    return value


CanonicalCidr = Annotated[str, AfterValidator(_canonical_cidr)]


class NetworkPlanRequest(CamelModel):
    """Request model for generating a Kubernetes network plan."""

    deployment_size: str = Field(
        ...,
        description="Deployment tier: micro, standard, professional, enterprise, hyperscale",
    )
    provider: str = Field(
        default=DEFAULT_PROVIDER,
        description="Cloud provider: eks, gke, aks, kubernetes (alias k8s)",
    )
    vpc_cidr: str | None = Field(
        default=None,
        description="Optional VPC CIDR (e.g., 10.0.0.0/16). If omitted a random RFC 1918 /16 is used",
    )
    region: str | None = Field(
        default=None,
        description="Cloud region (e.g., us-east-1, us-central1, eastus). Defaults per provider",
    )
    deployment_name: str | None = Field(default=None, description="Optional deployment name for reference")


class SubnetType(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class SubnetConfig(CamelModel):
    cidr: CanonicalCidr = Field(..., description="Subnet CIDR notation (e.g., 10.0.0.0/24)")
    name: str = Field(..., description="Subnet name (e.g., public-1, private-1)")
    type: SubnetType
    availability_zone: str | None = Field(default=None, description="Availability zone label")


class CidrBlock(CamelModel):
    cidr: CanonicalCidr


class SubnetAllocation(CamelModel):
    public: list[SubnetConfig] = Field(..., description="Public subnets for load balancers/ingress")
    private: list[SubnetConfig] = Field(..., description="Private subnets for worker nodes")


class PlanMetadata(CamelModel):
    generated_at: str = Field(..., description="ISO 8601 timestamp")
    version: str = PLAN_VERSION


class NetworkPlan(CamelModel):
    """Complete Kubernetes network plan.

    Public subnets, private subnets, the pod CIDR and the service CIDR never
    overlap. Pod and service ranges may lie outside the VPC block.
    """

    deployment_size: str
    provider: Literal["eks", "gke", "aks", "kubernetes"]
    region: str | None = None
    deployment_name: str | None = None
    vpc: CidrBlock
    subnets: SubnetAllocation
    pods: CidrBlock = Field(..., description="Pod network CIDR for the CNI plugin")
    services: CidrBlock = Field(..., description="Service ClusterIP range")
    metadata: PlanMetadata

    @field_validator("deployment_size")
    @classmethod
    def check_known_tier(cls, value: str) -> str:
        if value not in DEPLOYMENT_TIER_CONFIGS:
            raise ValueError(f"Unknown deployment size: {value}")
        return value

    @model_validator(mode="after")
    def check_subnet_types(self) -> "NetworkPlan":
        for expected, subnets in ((SubnetType.PUBLIC, self.subnets.public), (SubnetType.PRIVATE, self.subnets.private)):
            for subnet in subnets:
                if subnet.type != expected:
                    raise ValueError(f"Subnet {subnet.name} listed as {expected.value} but typed {subnet.type.value}")
        return self

    @model_validator(mode="after")
    def check_no_overlap(self) -> "NetworkPlan":
        blocks = [(s.name, s.cidr) for s in self.subnets.public + self.subnets.private]
        blocks.append(("pods", self.pods.cidr))
        blocks.append(("services", self.services.cidr))

        for (first_name, first), (second_name, second) in combinations(blocks, 2):
            if ranges_overlap(first, second):
                raise ValueError(f"{first_name} ({first}) overlaps {second_name} ({second})")
        return self

    def allocated_blocks(self) -> list[str]:
        """All allocated CIDRs in allocation order."""
        return [
            *(s.cidr for s in self.subnets.public),
            *(s.cidr for s in self.subnets.private),
            self.pods.cidr,
            self.services.cidr,
        ]

