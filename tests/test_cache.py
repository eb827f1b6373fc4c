from threshold_studio.config import ProcessingConfig
from threshold_studio.infrastructure import cache as cache_module
from threshold_studio.infrastructure.cache import ResponseCache, cache_key


def test_response_cache_eviction_limit():
    cache = ResponseCache(ttl=60)

    # Fill the cache beyond the limit to trigger eviction logic.
    for idx in range(20):
        cache.put(f"key-{idx}", b"data")

    assert len(cache._entries) == 16

    # Ensure the oldest entries are evicted first
    assert "key-0" not in cache._entries
    assert "key-3" not in cache._entries
    assert "key-4" in cache._entries


def test_response_cache_expires_entries(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(cache_module.time, "time", lambda: now[0])
    cache = ResponseCache(ttl=5)
    cache.put("key", b"data")

    now[0] += 4
    assert cache.get("key") == b"data"

    now[0] += 2
    assert cache.get("key") is None
    assert "key" not in cache._entries


def test_cache_key_depends_on_source_config_and_format():
    base = cache_key(b"source", ProcessingConfig(), "png")

    assert base == cache_key(b"source", ProcessingConfig(), "PNG")
    assert base != cache_key(b"other", ProcessingConfig(), "png")
    assert base != cache_key(b"source", ProcessingConfig(invert_colors=True), "png")
    assert base != cache_key(b"source", ProcessingConfig(), "bmp")


def test_last_good_image_round_trip():
    cache_module.forget_last_good()
    assert cache_module.last_good_image() is None

    cache_module.remember_last_good(b"bytes", "image/png")

    assert cache_module.last_good_image() == (b"bytes", "image/png")
    cache_module.forget_last_good()
