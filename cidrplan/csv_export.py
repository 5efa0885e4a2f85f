"""CSV export of subnet rows."""

import csv
import io
from collections.abc import Iterable

from .subnet_utils import SubnetInfo

CSV_COLUMNS = (
    ("CIDR", "cidr"),
    ("Network Address", "network_address"),
    ("Broadcast Address", "broadcast_address"),
    ("First Host", "first_host"),
    ("Last Host", "last_host"),
    ("Usable Hosts", "usable_hosts"),
    ("Total Hosts", "total_hosts"),
    ("Subnet Mask", "subnet_mask"),
    ("Wildcard Mask", "wildcard_mask"),
    ("Prefix", "prefix"),
)


def subnets_to_csv(rows: Iterable[SubnetInfo]) -> str:
    """Serialize subnets to CSV text, one row per subnet, in the given order."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([header for header, _ in CSV_COLUMNS])
    for subnet in rows:
        writer.writerow([getattr(subnet, field) for _, field in CSV_COLUMNS])
    return buffer.getvalue()
