"""IPv4 subnet arithmetic.

Pure functions over dotted-decimal addresses and CIDR strings:

- parse_address / int_to_address: address <-> 32-bit integer
- prefix_to_mask / mask_to_prefix: prefix length <-> netmask
- calculate_subnet: derive a SubnetInfo record from a CIDR string
- split_subnet: halve a subnet into two prefix+1 children
- count_nodes / collect_all / collect_visible: walks over a split tree

SubnetInfo trees are immutable. A split produces new nodes; split_in_tree
rebuilds the path from the root down to the node being split.
"""

from collections.abc import Collection

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .errors import (
    CannotSplitError,
    InvalidAddressError,
    InvalidCidrFormatError,
    InvalidPrefixError,
    SubnetNotFoundError,
    TreeSizeLimitExceededError,
)

MAX_ADDRESS = 0xFFFFFFFF

# Upper bound on the number of nodes in one split tree
MAX_TREE_NODES = 10_000


class SubnetInfo(BaseModel):
    """Derived details of a single IPv4 CIDR block.

    The canonical ``cidr`` doubles as the node identifier inside a split tree.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    cidr: str
    network_address: str
    broadcast_address: str
    first_host: str
    last_host: str
    total_hosts: int
    usable_hosts: int
    subnet_mask: str
    wildcard_mask: str
    prefix: int
    can_split: bool
    children: tuple["SubnetInfo", "SubnetInfo"] | None = None


SubnetInfo.model_rebuild()


def _parse_decimal(value: str) -> int | None:
    if not value or not (value.isascii() and value.isdigit()):
        return None
    return int(value)


def parse_address(address: str) -> int:
    """Convert a dotted-decimal IPv4 address to an unsigned 32-bit integer.

    The first octet is the most significant byte.

    Raises:
        InvalidAddressError: If the string is not exactly 4 octets in [0, 255]
    """
    if not isinstance(address, str):
        raise InvalidAddressError(f"Invalid IP format: {address!r}")

    octets = address.split(".")
    if len(octets) != 4:
        raise InvalidAddressError(f"Invalid IP format: {address}")

    result = 0
    for octet in octets:
        value = _parse_decimal(octet)
        if value is None or value > 255:
            raise InvalidAddressError(f"Invalid IP octet: {octet!r} in {address}")
        result = ((result << 8) | value) & MAX_ADDRESS

    return result


address_to_int = parse_address


def int_to_address(value: int) -> str:
    """Convert an unsigned 32-bit integer to dotted-decimal notation."""
    if value < 0 or value > MAX_ADDRESS:
        raise InvalidAddressError(f"Address value out of IPv4 range: {value}")
    return ".".join(str((value >> shift) & 0xFF) for shift in (24, 16, 8, 0))


def prefix_to_mask(prefix: int) -> int:
    """Return the netmask for a prefix length as a 32-bit integer.

    Raises:
        InvalidPrefixError: If prefix is outside [0, 32]
    """
    if isinstance(prefix, bool) or not isinstance(prefix, int) or prefix < 0 or prefix > 32:
        raise InvalidPrefixError(f"Invalid prefix length: {prefix}. Must be between 0 and 32.")
    if prefix == 0:
        return 0
    return (MAX_ADDRESS << (32 - prefix)) & MAX_ADDRESS


def mask_to_prefix(mask: int) -> int:
    """Count the leading one bits of a netmask."""
    prefix = 0
    mask &= MAX_ADDRESS
    while mask & 0x80000000:
        prefix += 1
        mask = (mask << 1) & MAX_ADDRESS
    return prefix


def calculate_subnet(cidr: str) -> SubnetInfo:
    """Calculate network, broadcast and host range for a CIDR block.

    Boundary cases:
    - /31: RFC 3021 point-to-point, both addresses usable
    - /32: single host, network == broadcast == the host

    Args:
        cidr: Block in "address/prefix" notation; the address need not be
            the network address

    Returns:
        SubnetInfo with the canonical (network address) CIDR

    Raises:
        InvalidCidrFormatError: If the string does not contain exactly one "/"
        InvalidPrefixError: If the prefix is not an integer in [0, 32]
        InvalidAddressError: If the address part is malformed
    """
    if not isinstance(cidr, str):
        raise InvalidCidrFormatError(f"Invalid CIDR format: {cidr!r}")

    parts = cidr.strip().split("/")
    if len(parts) != 2:
        raise InvalidCidrFormatError(f"Invalid CIDR format: {cidr}")

    address_str, prefix_str = parts
    prefix = _parse_decimal(prefix_str)
    if prefix is None:
        raise InvalidPrefixError(f"Invalid prefix: {prefix_str!r}")

    mask = prefix_to_mask(prefix)
    address = parse_address(address_str)

    wildcard = ~mask & MAX_ADDRESS
    network = address & mask
    broadcast = network | wildcard
    total_hosts = 1 << (32 - prefix)

    if prefix == 32:
        usable_hosts = 1
        first_host = last_host = network
    elif prefix == 31:
        usable_hosts = 2
        first_host, last_host = network, broadcast
    else:
        usable_hosts = total_hosts - 2
        first_host, last_host = network + 1, broadcast - 1

    return SubnetInfo(
        cidr=f"{int_to_address(network)}/{prefix}",
        network_address=int_to_address(network),
        broadcast_address=int_to_address(broadcast),
        first_host=int_to_address(first_host),
        last_host=int_to_address(last_host),
        total_hosts=total_hosts,
        usable_hosts=usable_hosts,
        subnet_mask=int_to_address(mask),
        wildcard_mask=int_to_address(wildcard),
        prefix=prefix,
        can_split=prefix < 32,
    )


def subnet_bounds(cidr: str) -> tuple[int, int]:
    """Return (first, last) address of a CIDR block as integers."""
    subnet = calculate_subnet(cidr)
    return parse_address(subnet.network_address), parse_address(subnet.broadcast_address)


def ranges_overlap(first: str, second: str) -> bool:
    """Check whether two CIDR blocks share at least one address."""
    first_start, first_end = subnet_bounds(first)
    second_start, second_end = subnet_bounds(second)
    return first_start <= second_end and second_start <= first_end


def is_private_address(address: str) -> bool:
    """Check if an address is in RFC 1918 space (10/8, 172.16/12, 192.168/16)."""
    value = parse_address(address)
    first = value >> 24
    second = (value >> 16) & 0xFF

    if first == 10:
        return True
    if first == 172 and 16 <= second <= 31:
        return True
    return first == 192 and second == 168


def subnet_class(subnet: str | SubnetInfo) -> str:
    """Return the classful network label (A-E) for a CIDR, address or SubnetInfo."""
    if isinstance(subnet, SubnetInfo):
        address = subnet.network_address
    else:
        address = str(subnet).split("/")[0]

    try:
        first_octet = parse_address(address) >> 24
    except InvalidAddressError:
        return "Unknown"

    if 1 <= first_octet <= 126:
        return "A"
    if 128 <= first_octet <= 191:
        return "B"
    if 192 <= first_octet <= 223:
        return "C"
    if 224 <= first_octet <= 239:
        return "D (Multicast)"
    if 240 <= first_octet <= 255:
        return "E (Reserved)"
    return "Unknown"


def count_nodes(subnet: SubnetInfo) -> int:
    """Count a node and all of its descendants."""
    count = 1
    for child in subnet.children or ():
        count += count_nodes(child)
    return count


def split_subnet(
    subnet: SubnetInfo,
    current_tree_size: int = 1,
    max_nodes: int = MAX_TREE_NODES,
) -> tuple[SubnetInfo, SubnetInfo]:
    """Split a subnet into its lower and upper prefix+1 halves.

    Args:
        subnet: Subnet to split
        current_tree_size: Number of nodes already in the tree
        max_nodes: Tree size cap; the split is refused once it is reached

    Returns:
        (lower half, upper half)

    Raises:
        CannotSplitError: If the subnet is a /32
        TreeSizeLimitExceededError: If current_tree_size >= max_nodes
    """
    if not subnet.can_split:
        raise CannotSplitError(f"Cannot split a /32 subnet: {subnet.cidr}")

    if current_tree_size >= max_nodes:
        raise TreeSizeLimitExceededError(
            f"Tree size limit ({max_nodes} nodes) exceeded. Cannot split further."
        )

    new_prefix = subnet.prefix + 1
    network = parse_address(subnet.network_address)
    child_size = 1 << (32 - new_prefix)

    lower = calculate_subnet(f"{int_to_address(network)}/{new_prefix}")
    upper = calculate_subnet(f"{int_to_address(network + child_size)}/{new_prefix}")
    return lower, upper


def _contains(subnet: SubnetInfo, address: int) -> bool:
    return parse_address(subnet.network_address) <= address <= parse_address(subnet.broadcast_address)


def find_node(root: SubnetInfo, cidr: str) -> SubnetInfo | None:
    """Find the node with the given CIDR in a split tree."""
    target = calculate_subnet(cidr)
    target_address = parse_address(target.network_address)

    node = root
    while node is not None and _contains(node, target_address):
        if node.cidr == target.cidr:
            return node
        node = next((c for c in node.children or () if _contains(c, target_address)), None)
    return None


def split_in_tree(
    root: SubnetInfo,
    cidr: str,
    max_nodes: int = MAX_TREE_NODES,
    tree_size: int | None = None,
) -> SubnetInfo:
    """Split the node named by ``cidr`` and return the rebuilt tree root.

    Nodes off the path to the split node are shared with the old tree.
    Splitting a node that already has children returns ``root`` itself.

    Args:
        root: Tree root
        cidr: Node to split
        max_nodes: Tree size cap
        tree_size: Current node count when the caller tracks it; counted
            from ``root`` when omitted

    Raises:
        SubnetNotFoundError: If no node in the tree has that CIDR
        CannotSplitError: If the node is a /32
        TreeSizeLimitExceededError: If the tree already holds max_nodes nodes
    """
    target = calculate_subnet(cidr).cidr

    node = find_node(root, target)
    if node is None:
        raise SubnetNotFoundError(f"Subnet {target} is not part of the tree rooted at {root.cidr}")
    if node.children:
        return root

    children = split_subnet(node, count_nodes(root) if tree_size is None else tree_size, max_nodes)

    def rebuild(node: SubnetInfo) -> SubnetInfo:
        if node.cidr == target:
            return node.model_copy(update={"children": children})

        lower, upper = node.children
        if find_node(lower, target) is not None:
            return node.model_copy(update={"children": (rebuild(lower), upper)})
        return node.model_copy(update={"children": (lower, rebuild(upper))})

    return rebuild(root)


def collect_all(subnet: SubnetInfo, expanded: Collection[str] | None = None) -> list[SubnetInfo]:
    """Collect nodes in pre-order.

    With ``expanded=None`` every node is returned. Otherwise children are
    only descended into for nodes whose CIDR is in ``expanded``.
    """
    result = [subnet]
    if subnet.children and (expanded is None or subnet.cidr in expanded):
        for child in subnet.children:
            result.extend(collect_all(child, expanded))
    return result


def collect_visible(
    subnet: SubnetInfo,
    hide_parents: bool,
    expanded: Collection[str] = frozenset(),
) -> list[SubnetInfo]:
    """Collect the rows a tree view shows.

    With ``hide_parents`` a node that has been split is replaced by its
    descendants. Otherwise the node is shown, followed by its children
    when its CIDR is in ``expanded``. Left child always precedes right.
    """
    if hide_parents and subnet.children:
        result = []
        for child in subnet.children:
            result.extend(collect_visible(child, hide_parents, expanded))
        return result

    result = [subnet]
    if subnet.children and subnet.cidr in expanded:
        for child in subnet.children:
            result.extend(collect_visible(child, hide_parents, expanded))
    return result
