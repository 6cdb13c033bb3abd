"""ghanalyzer resource clients."""

from ghanalyzer.clients.repos import ReposClient

__all__ = [
    "ReposClient",
]
