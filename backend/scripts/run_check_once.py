#!/usr/bin/env python3
"""Manually run a single rate check cycle.

Run from backend directory:
    python scripts/run_check_once.py

Uses the same .env configuration as the service. A breached threshold
sends a real alert email, subject to the usual retry policy.
"""

import asyncio
import sys

sys.path.insert(0, ".")

from app.core.config import ConfigurationError, get_settings
from app.core.logging import setup_logging
from app.main import build_monitor


async def main():
    print("\n" + "=" * 60)
    print("Currency Rate Monitor - Manual Check")
    print("=" * 60 + "\n")

    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(e)
        sys.exit(1)

    setup_logging(level=settings.log_level)
    components = build_monitor(settings)

    print(f"Checking {settings.currency_pair} "
          f"(lower={settings.rate_lower_threshold}, upper={settings.rate_upper_threshold})...")
    try:
        result = await components.orchestrator.execute_check()
    finally:
        await components.close()

    print("\n" + "-" * 60)
    print("Result:")
    print(f"  Status: {result.status.value}")
    if result.rate is not None:
        print(f"  Rate: {result.rate:.4f}")
    if result.message:
        print(f"  Message: {result.message}")
    if result.error:
        print(f"  Error: {result.error}")
    print(f"  Finished: {result.finished_at.isoformat()}")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    asyncio.run(main())
