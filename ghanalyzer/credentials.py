"""
Credential store for ghanalyzer.

Holds the optional GitHub personal access token and tells transports when it
changes so they can rebuild their HTTP client before the next request.
"""

from collections.abc import Callable

from ghanalyzer.logging import get_logger
from ghanalyzer.storage import MemoryStorage, Storage
from ghanalyzer.types.rate_limit import RateLimitInfo

logger = get_logger()

CREDENTIAL_STORAGE_KEY = "github_api_key"

AUTHENTICATED_LIMIT = 5000
ANONYMOUS_LIMIT = 60


class CredentialStore:
    """
    Persistent holder of at most one GitHub token.

    Example:
        ```python
        store = CredentialStore(JSONFileStorage("~/.ghanalyzer.json"))
        store.set_credential("ghp_...")
        store.get_rate_limit_info().limit  # 5000
        store.set_credential(None)         # back to anonymous mode
        ```
    """

    def __init__(
        self,
        storage: Storage | None = None,
        storage_key: str = CREDENTIAL_STORAGE_KEY,
    ) -> None:
        """
        Initialize the credential store.

        Args:
            storage: Backing storage (default: in-memory)
            storage_key: Key the token is stored under
        """
        self.storage = storage if storage is not None else MemoryStorage()
        self.storage_key = storage_key
        self._listeners: list[Callable[[], None]] = []

    def get_credential(self) -> str | None:
        """Return the stored token, or None in anonymous mode."""
        token = self.storage.get(self.storage_key)
        if isinstance(token, str) and token:
            return token
        return None

    def set_credential(self, token: str | None) -> None:
        """
        Store or clear the token.

        A blank or None token removes the stored value entirely. Every call
        notifies listeners, so stale clients are never reused.

        Args:
            token: Personal access token, or None to switch to anonymous mode
        """
        token = token.strip() if token else None
        if token:
            self.storage.set(self.storage_key, token)
            logger.info("GitHub credential set; using authenticated requests")
        else:
            self.storage.remove(self.storage_key)
            logger.info("GitHub credential cleared; using anonymous requests")

        for listener in list(self._listeners):
            listener()

    def has_credential(self) -> bool:
        """Return True if a token is stored."""
        return self.get_credential() is not None

    def get_rate_limit_info(self) -> RateLimitInfo:
        """
        Return GitHub's documented hourly ceiling for the current mode.

        This is a static policy lookup, not a live quota check.
        """
        if self.has_credential():
            return RateLimitInfo(
                has_credential=True, limit=AUTHENTICATED_LIMIT, label="authenticated"
            )
        return RateLimitInfo(has_credential=False, limit=ANONYMOUS_LIMIT, label="anonymous")

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Register a callback invoked after every credential mutation."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        """Unregister a mutation callback."""
        if callback in self._listeners:
            self._listeners.remove(callback)
