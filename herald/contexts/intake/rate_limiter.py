"""
Per-client fixed-window rate limiting.

Each client key gets `max_requests` requests per window. The counter resets
entirely when the window ends; a request arriving exactly at the reset time opens a
fresh window. Bursts straddling a window boundary can therefore reach twice the
ceiling in a short span, which is an accepted limitation of the fixed window.

State lives behind RateLimitStore so it can be moved to an external cache for
multi-instance deployments. The limiter holds the store's per-key lock for the whole
read-modify-write, so concurrent requests for one key never under-count.
"""

import threading
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Mapping, Optional

from herald.contexts.intake.logger import log_rate_limit_denied, log_window_opened

UNKNOWN_CLIENT = "unknown"

DEFAULT_MAX_REQUESTS = 10
DEFAULT_WINDOW_SECONDS = 60 * 60


@dataclass
class RateLimitEntry:
    """
    Request count for one client key within the current window.

    Attributes:
        client_key: Bucket identifier (usually a client IP address)
        count: Requests accepted in this window
        window_reset_at: Epoch seconds at which the window ends
    """

    client_key: str
    count: int
    window_reset_at: float


class RateLimitStore(ABC):
    """
    Key -> RateLimitEntry storage.

    Implementations must provide a lock per key; RateLimiter holds it around every
    get/set pair.
    """

    @abstractmethod
    def get(self, client_key: str) -> Optional[RateLimitEntry]:
        """Return the entry for client_key, or None if there isn't one."""

    @abstractmethod
    def set(self, client_key: str, entry: RateLimitEntry, expires_at: float) -> None:
        """
        Store entry for client_key.

        expires_at is the epoch time after which the entry is no longer needed;
        stores backed by an expiring cache should use it as the key's TTL.
        """

    @abstractmethod
    def lock(self, client_key: str):
        """Context manager serializing access to one key."""


class InMemoryRateLimitStore(RateLimitStore):
    """
    Process-local store.

    Entries are never evicted; a stale entry is simply overwritten the next time its
    key makes a request.
    """

    def __init__(self):
        self._entries: Dict[str, RateLimitEntry] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def get(self, client_key: str) -> Optional[RateLimitEntry]:
        return self._entries.get(client_key)

    def set(self, client_key: str, entry: RateLimitEntry, expires_at: float) -> None:
        self._entries[client_key] = entry

    @contextmanager
    def lock(self, client_key: str) -> Iterator[None]:
        with self._locks_guard:
            key_lock = self._locks.get(client_key)
            if key_lock is None:
                key_lock = self._locks[client_key] = threading.Lock()
        with key_lock:
            yield

    def __len__(self) -> int:
        return len(self._entries)


class RateLimiter:
    """
    Fixed-window counter guarding provider spend.

    Example:
        limiter = RateLimiter(max_requests=10, window_seconds=3600)
        if not limiter.check_and_consume("203.0.113.7"):
            raise RateLimitError(...)
    """

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        store: RateLimitStore = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            max_requests: Requests allowed per key per window
            window_seconds: Window length
            store: Entry storage (defaults to a new InMemoryRateLimitStore)
            clock: Returns current epoch seconds (injectable for tests)
        """
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.store = store if store is not None else InMemoryRateLimitStore()
        self.clock = clock

    def check_and_consume(self, client_key: str) -> bool:
        """
        Count one request against client_key.

        Returns:
            True if the request is allowed (and counted), False if the key has
            already used its allowance for the current window (not counted)
        """
        with self.store.lock(client_key):
            now = self.clock()
            entry = self.store.get(client_key)

            if entry is None or now >= entry.window_reset_at:
                reset_at = now + self.window_seconds
                self.store.set(client_key, RateLimitEntry(client_key, 1, reset_at), reset_at)
                log_window_opened(client_key, reset_at)
                return True

            if entry.count >= self.max_requests:
                log_rate_limit_denied(client_key, entry.count, entry.window_reset_at - now)
                return False

            updated = RateLimitEntry(client_key, entry.count + 1, entry.window_reset_at)
            self.store.set(client_key, updated, entry.window_reset_at)
            return True

    def retry_after(self, client_key: str) -> int:
        """Whole seconds until client_key's window resets (0 if no active window)."""
        with self.store.lock(client_key):
            entry = self.store.get(client_key)
            if entry is None:
                return 0
            remaining = entry.window_reset_at - self.clock()
        return max(0, int(remaining + 0.999))

    def remaining(self, client_key: str) -> int:
        """Requests left for client_key in its current window."""
        with self.store.lock(client_key):
            entry = self.store.get(client_key)
            if entry is None or self.clock() >= entry.window_reset_at:
                return self.max_requests
            return max(0, self.max_requests - entry.count)


def client_key_from_headers(
    headers: Mapping[str, str],
    peer_address: Optional[str] = None,
    trust_forwarded: bool = True,
) -> str:
    """
    Derive the rate-limit key for a request.

    With trust_forwarded (proxied deployments), the first address in
    x-forwarded-for wins, then x-real-ip. Without it (direct connections), the
    socket peer address is used. Requests with no usable identity share the
    UNKNOWN_CLIENT bucket.

    Args:
        headers: Request headers (case-insensitive mapping, or lowercase keys)
        peer_address: Socket peer address, if known
        trust_forwarded: Whether proxy headers are authoritative

    Returns:
        Client key string
    """
    if trust_forwarded:
        forwarded = headers.get("x-forwarded-for")
        if forwarded:
            first = forwarded.split(",")[0].strip()
            if first:
                return first
        real_ip = headers.get("x-real-ip")
        if real_ip and real_ip.strip():
            return real_ip.strip()
        return UNKNOWN_CLIENT

    return peer_address or UNKNOWN_CLIENT
