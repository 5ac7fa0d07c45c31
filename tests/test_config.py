import pytest

from timecache import ExpiringCache
from timecache.config import CacheConfig, JanitorConfig, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("TIMECACHE_STORE_SECONDS", "TIMECACHE_SWEEP_PERIOD_SECONDS", "TIMECACHE_YIELD_EVERY"):
        monkeypatch.delenv(name, raising=False)


def test_load_config_defaults():
    config = load_config()
    assert config.store_seconds == 600.0
    assert config.janitor.sweep_period_seconds == 60.0
    assert config.janitor.yield_every == 0


def test_load_config_from_env(monkeypatch):
    monkeypatch.setenv("TIMECACHE_STORE_SECONDS", "30")
    monkeypatch.setenv("TIMECACHE_SWEEP_PERIOD_SECONDS", "0")
    monkeypatch.setenv("TIMECACHE_YIELD_EVERY", "500")
    config = load_config()
    assert config.effective_store_seconds == 30.0
    assert config.janitor == JanitorConfig(sweep_period_seconds=0.0, yield_every=500)


def test_load_config_clamps_negative_values(monkeypatch):
    monkeypatch.setenv("TIMECACHE_SWEEP_PERIOD_SECONDS", "-5")
    monkeypatch.setenv("TIMECACHE_YIELD_EVERY", "-1")
    config = load_config()
    assert config.janitor.sweep_period_seconds == 0.0
    assert config.janitor.yield_every == 0


def test_zero_store_seconds_means_default(monkeypatch):
    monkeypatch.setenv("TIMECACHE_STORE_SECONDS", "0")
    assert load_config().effective_store_seconds == 600.0
    assert CacheConfig(store_seconds=-1).effective_store_seconds == 600.0


def test_from_env_builds_cache(monkeypatch):
    monkeypatch.setenv("TIMECACHE_STORE_SECONDS", "12")
    monkeypatch.setenv("TIMECACHE_SWEEP_PERIOD_SECONDS", "0")
    cache = ExpiringCache.from_env(now=lambda: 0.0)
    assert cache.default_store_seconds == 12.0
    assert not cache.janitor_running
