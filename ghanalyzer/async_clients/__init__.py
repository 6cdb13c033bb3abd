"""ghanalyzer async resource clients."""

from ghanalyzer.async_clients.repos import AsyncReposClient

__all__ = [
    "AsyncReposClient",
]
