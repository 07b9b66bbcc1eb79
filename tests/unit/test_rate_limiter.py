"""Unit tests for the fixed-window rate limiter."""

import threading

import pytest

from herald.contexts.intake.rate_limiter import (
    UNKNOWN_CLIENT,
    InMemoryRateLimitStore,
    RateLimiter,
    client_key_from_headers,
)

CLIENT = "203.0.113.7"


@pytest.mark.unit
def test_allows_up_to_max_requests(rate_limiter):
    results = [rate_limiter.check_and_consume(CLIENT) for _ in range(11)]

    assert results[:10] == [True] * 10
    assert results[10] is False


@pytest.mark.unit
def test_denied_requests_are_not_counted(rate_limiter):
    for _ in range(10):
        rate_limiter.check_and_consume(CLIENT)

    for _ in range(5):
        assert not rate_limiter.check_and_consume(CLIENT)

    assert rate_limiter.store.get(CLIENT).count == 10


@pytest.mark.unit
def test_keys_are_independent(rate_limiter):
    for _ in range(10):
        rate_limiter.check_and_consume(CLIENT)

    assert not rate_limiter.check_and_consume(CLIENT)
    assert rate_limiter.check_and_consume("198.51.100.1")


@pytest.mark.unit
def test_window_resets_after_expiry(rate_limiter, clock):
    """First request after the window ends opens a fresh window with count 1."""
    for _ in range(10):
        rate_limiter.check_and_consume(CLIENT)
    assert not rate_limiter.check_and_consume(CLIENT)

    clock.advance(3601)

    assert rate_limiter.check_and_consume(CLIENT)
    assert rate_limiter.store.get(CLIENT).count == 1


@pytest.mark.unit
def test_window_boundary_is_exclusive(rate_limiter, clock):
    """A request exactly at the reset time starts a new window."""
    for _ in range(10):
        rate_limiter.check_and_consume(CLIENT)

    clock.advance(3599)
    assert not rate_limiter.check_and_consume(CLIENT)

    clock.advance(1)
    assert rate_limiter.check_and_consume(CLIENT)
    assert rate_limiter.store.get(CLIENT).window_reset_at == pytest.approx(clock.now + 3600)


@pytest.mark.unit
def test_window_does_not_slide(rate_limiter, clock):
    """Requests inside a window don't extend its reset time."""
    rate_limiter.check_and_consume(CLIENT)
    reset_at = rate_limiter.store.get(CLIENT).window_reset_at

    clock.advance(1800)
    rate_limiter.check_and_consume(CLIENT)

    assert rate_limiter.store.get(CLIENT).window_reset_at == reset_at


@pytest.mark.unit
def test_retry_after_and_remaining(rate_limiter, clock):
    assert rate_limiter.retry_after(CLIENT) == 0
    assert rate_limiter.remaining(CLIENT) == 10

    for _ in range(10):
        rate_limiter.check_and_consume(CLIENT)
    clock.advance(600.5)

    assert rate_limiter.retry_after(CLIENT) == 3000
    assert rate_limiter.remaining(CLIENT) == 0

    clock.advance(3000)
    assert rate_limiter.retry_after(CLIENT) == 0
    assert rate_limiter.remaining(CLIENT) == 10


@pytest.mark.unit
@pytest.mark.parametrize("max_requests, window_seconds", [(0, 60), (10, 0), (10, -5)])
def test_rejects_non_positive_settings(max_requests, window_seconds):
    with pytest.raises(ValueError):
        RateLimiter(max_requests=max_requests, window_seconds=window_seconds)


@pytest.mark.unit
def test_concurrent_requests_never_exceed_ceiling():
    """Many threads hammering one key admit exactly max_requests."""
    limiter = RateLimiter(max_requests=25, window_seconds=3600, store=InMemoryRateLimitStore())
    allowed = []
    allowed_lock = threading.Lock()
    barrier = threading.Barrier(20)

    def worker():
        barrier.wait()
        for _ in range(10):
            if limiter.check_and_consume(CLIENT):
                with allowed_lock:
                    allowed.append(1)

    threads = [threading.Thread(target=worker) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(allowed) == 25
    assert limiter.store.get(CLIENT).count == 25


@pytest.mark.unit
def test_store_tracks_one_entry_per_key():
    store = InMemoryRateLimitStore()
    limiter = RateLimiter(store=store)

    limiter.check_and_consume("a")
    limiter.check_and_consume("a")
    limiter.check_and_consume("b")

    assert len(store) == 2


# --- Client keys ---


@pytest.mark.unit
def test_client_key_first_forwarded_address():
    headers = {"x-forwarded-for": "203.0.113.7, 10.0.0.1, 10.0.0.2", "x-real-ip": "10.9.9.9"}
    assert client_key_from_headers(headers) == "203.0.113.7"


@pytest.mark.unit
def test_client_key_real_ip_fallback():
    assert client_key_from_headers({"x-real-ip": " 198.51.100.4 "}) == "198.51.100.4"
    assert client_key_from_headers({"x-forwarded-for": " ", "x-real-ip": "198.51.100.4"}) == "198.51.100.4"


@pytest.mark.unit
def test_client_key_unknown_bucket():
    assert client_key_from_headers({}) == UNKNOWN_CLIENT
    assert client_key_from_headers({}, peer_address="127.0.0.1") == UNKNOWN_CLIENT


@pytest.mark.unit
def test_client_key_untrusted_headers_use_peer():
    headers = {"x-forwarded-for": "203.0.113.7"}

    assert client_key_from_headers(headers, peer_address="192.0.2.50", trust_forwarded=False) == "192.0.2.50"
    assert client_key_from_headers(headers, trust_forwarded=False) == UNKNOWN_CLIENT
