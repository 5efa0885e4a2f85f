"""Tests for CSV export of subnet rows."""

import csv
import io

from cidrplan.csv_export import CSV_COLUMNS, subnets_to_csv
from cidrplan.subnet_utils import calculate_subnet, split_subnet


def test_header_only_for_no_rows():
    assert subnets_to_csv([]) == ",".join(header for header, _ in CSV_COLUMNS) + "\n"


def test_rows_follow_input_order():
    children = split_subnet(calculate_subnet("192.168.0.0/24"))
    text = subnets_to_csv(reversed(children))

    rows = list(csv.DictReader(io.StringIO(text)))
    assert [row["CIDR"] for row in rows] == ["192.168.0.128/25", "192.168.0.0/25"]
    assert rows[0]["Broadcast Address"] == "192.168.0.255"
    assert rows[0]["Usable Hosts"] == "126"
    assert rows[0]["Total Hosts"] == "128"
    assert rows[0]["Subnet Mask"] == "255.255.255.128"
    assert rows[0]["Wildcard Mask"] == "0.0.0.127"
    assert rows[0]["Prefix"] == "25"


def test_single_host_row():
    text = subnets_to_csv([calculate_subnet("10.0.0.7/32")])
    assert text.splitlines()[1] == "10.0.0.7/32,10.0.0.7,10.0.0.7,10.0.0.7,10.0.0.7,1,1,255.255.255.255,0.0.0.0,32"
