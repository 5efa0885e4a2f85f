"""IPv4 subnet arithmetic and Kubernetes network plan generation."""

__version__ = "1.0.0"
