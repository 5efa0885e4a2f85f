"""Subnet calculation endpoints.

Provides IPv4 subnet details, binary splitting and split-tree views.
Calculation errors propagate as CidrPlanError and are turned into 400
responses by the application's exception handler.
"""

from fastapi import APIRouter, Depends, Query, Response

from ..auth import get_current_user
from ..csv_export import subnets_to_csv
from ..models.subnet import (
    AddressRequest,
    CheckPrivateResponse,
    SplitResponse,
    SubnetInfoRequest,
    TreeRequest,
    TreeResponse,
)
from ..subnet_utils import (
    SubnetInfo,
    calculate_subnet,
    collect_all,
    collect_visible,
    is_private_address,
    split_in_tree,
    split_subnet,
    subnet_class,
)

router = APIRouter(prefix="/api/v1/ipv4", tags=["subnets"])


@router.post("/subnet-info", response_model=SubnetInfo)
async def subnet_info(request: SubnetInfoRequest, current_user: str = Depends(get_current_user)):
    """Calculate IPv4 subnet information including the usable host range.

    - /0 to /30: network and broadcast addresses are reserved
    - /31: RFC 3021 point-to-point, both addresses usable
    - /32: single host

    Raises:
        CidrPlanError: 400 if the network is malformed
    """
    return calculate_subnet(request.network)


@router.post("/split", response_model=SplitResponse)
async def split(request: SubnetInfoRequest, current_user: str = Depends(get_current_user)):
    """Split a subnet into its two prefix+1 halves."""
    parent = calculate_subnet(request.network)
    return SplitResponse(parent=parent, children=list(split_subnet(parent)))


@router.post("/tree", response_model=TreeResponse)
async def subnet_tree(
    request: TreeRequest,
    output_format: str = Query("json", alias="format", pattern="^(json|csv)$"),
    current_user: str = Depends(get_current_user),
):
    """Build a split tree and return the rows a tree view would show.

    Splits are applied in order; each CIDR must already be a node of the
    tree. With ``?format=csv`` the visible rows are returned as CSV.

    Raises:
        CidrPlanError: 400 on malformed CIDRs, unknown nodes, /32 splits or
            when the tree size limit is reached
    """
    root = calculate_subnet(request.network)
    tree_size = 1
    for cidr in request.splits:
        updated = split_in_tree(root, cidr, tree_size=tree_size)
        if updated is not root:
            root, tree_size = updated, tree_size + 2

    if request.expanded is None:
        expanded = {node.cidr for node in collect_all(root) if node.children}
    else:
        expanded = {calculate_subnet(cidr).cidr for cidr in request.expanded}

    # Rows are flat; the nested structure is returned once, under root
    rows = [row.model_copy(update={"children": None}) for row in collect_visible(root, request.hide_parents, expanded)]

    if output_format == "csv":
        return Response(
            content=subnets_to_csv(rows),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="subnets.csv"'},
        )

    return TreeResponse(root=root, node_count=tree_size, rows=rows)


@router.post("/check-private", response_model=CheckPrivateResponse)
async def check_private(request: AddressRequest, current_user: str = Depends(get_current_user)):
    """Check if an IPv4 address or range is RFC 1918 private.

    RFC 1918 ranges: 10.0.0.0/8, 172.16.0.0/12, 192.168.0.0/16.
    A range only counts as private if it lies entirely within one of them.
    """
    address_str = request.address.strip()

    if "/" in address_str:
        subnet = calculate_subnet(address_str)
        is_private = is_private_address(subnet.network_address) and is_private_address(subnet.broadcast_address)
        address_class = subnet_class(subnet)
    else:
        is_private = is_private_address(address_str)
        address_class = subnet_class(address_str)

    return CheckPrivateResponse(address=address_str, is_rfc1918=is_private, address_class=address_class)
