"""Configuration helpers for the expiring cache."""

from dataclasses import dataclass, field
import os

DEFAULT_STORE_SECONDS = 600.0
DEFAULT_SWEEP_PERIOD_SECONDS = 60.0


@dataclass(frozen=True)
class JanitorConfig:
    # 0 disables the background janitor; sweeping is then manual only
    sweep_period_seconds: float = DEFAULT_SWEEP_PERIOD_SECONDS
    # 0 holds the write lock for the whole sweep
    yield_every: int = 0


@dataclass(frozen=True)
class CacheConfig:
    store_seconds: float = DEFAULT_STORE_SECONDS
    janitor: JanitorConfig = field(default_factory=JanitorConfig)

    @property
    def effective_store_seconds(self) -> float:
        if self.store_seconds <= 0:
            return DEFAULT_STORE_SECONDS
        return float(self.store_seconds)


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def load_config() -> CacheConfig:
    return CacheConfig(
        store_seconds=_float_env("TIMECACHE_STORE_SECONDS", DEFAULT_STORE_SECONDS),
        janitor=JanitorConfig(
            sweep_period_seconds=max(
                0.0, _float_env("TIMECACHE_SWEEP_PERIOD_SECONDS", DEFAULT_SWEEP_PERIOD_SECONDS)
            ),
            yield_every=max(0, _int_env("TIMECACHE_YIELD_EVERY", 0)),
        ),
    )
