"""Build, deploy and query programs on a co-processor service."""

__version__ = "0.2.0"
__all__ = ["builder", "circuit", "cli", "client", "program"]