"""Validate timecache environment variables without building a cache."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from timecache.config import load_config

ENV_VARS = ("TIMECACHE_STORE_SECONDS", "TIMECACHE_SWEEP_PERIOD_SECONDS", "TIMECACHE_YIELD_EVERY")


def main() -> int:
    load_dotenv()
    errors: list[str] = []
    warnings: list[str] = []

    try:
        config = load_config()
    except ValueError as exc:
        errors.append(f"Invalid numeric value: {exc}")
        config = None

    if config is not None:
        if config.store_seconds <= 0:
            warnings.append("TIMECACHE_STORE_SECONDS is not positive; the 600s default is used")
        if config.janitor.sweep_period_seconds == 0:
            warnings.append("Background janitor disabled; expired entries are removed only by sweep_expired()")
        elif config.janitor.yield_every == 0:
            warnings.append("TIMECACHE_YIELD_EVERY is 0; sweeps hold the write lock for the whole scan")
    for name in ENV_VARS:
        raw = os.getenv(name)
        if raw is not None and raw.strip().startswith("-"):
            warnings.append(f"{name} is negative and will be clamped")

    if errors:
        print("Errors:")
        for item in errors:
            print(f"- {item}")

    if warnings:
        print("Warnings:")
        for item in warnings:
            print(f"- {item}")

    if errors:
        return 1

    print("OK: environment looks valid")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
