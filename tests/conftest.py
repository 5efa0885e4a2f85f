"""Pytest configuration and shared fixtures."""

import ipaddress
import os
import random
from collections import deque

import pytest


@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables before each test."""
    original_env = os.environ.copy()

    os.environ["AUTH_METHOD"] = "none"

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def rng():
    """Seeded random source for reproducible VPC generation."""
    return random.Random(1918)


@pytest.fixture
def breadth_first_splits():
    """Build split lists that grow a tree level by level."""

    def build(network, count):
        queue = deque([ipaddress.ip_network(network)])
        splits = []
        while len(splits) < count:
            node = queue.popleft()
            splits.append(str(node))
            queue.extend(node.subnets())
        return splits

    return build
