"""Pydantic models for the IPv4 subnet calculator endpoints."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..subnet_utils import MAX_TREE_NODES, SubnetInfo

# Each split adds two nodes, so this many splits reach the tree size cap
MAX_TREE_SPLITS = MAX_TREE_NODES // 2


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys; snake_case input also accepted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SubnetInfoRequest(CamelModel):
    """Request model for IPv4 subnet calculation."""

    network: str = Field(..., description="IPv4 network in CIDR notation (e.g., 192.168.1.0/24)")


class SplitResponse(CamelModel):
    parent: SubnetInfo
    children: list[SubnetInfo]


class TreeRequest(CamelModel):
    """Request model for building a split tree."""

    network: str = Field(..., description="Root network in CIDR notation")
    splits: list[str] = Field(
        default_factory=list,
        max_length=MAX_TREE_SPLITS,
        description="CIDRs to split, applied in order (each must already be in the tree)",
    )
    hide_parents: bool = Field(default=False, description="Show only leaf subnets")
    expanded: list[str] | None = Field(
        default=None,
        max_length=MAX_TREE_NODES,
        description="CIDRs whose children are shown; defaults to every split node",
    )


class TreeResponse(CamelModel):
    root: SubnetInfo
    node_count: int
    rows: list[SubnetInfo]


class AddressRequest(CamelModel):
    """Request model for address checks."""

    address: str = Field(..., description="IPv4 address or CIDR notation")


class CheckPrivateResponse(CamelModel):
    address: str
    is_rfc1918: bool
    address_class: str
