#!/usr/bin/env python3
"""Diagnostic script: checks configuration and reachability of the external services."""

import asyncio
import sys
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from smartroute.config import settings
from smartroute.errors import GeocodingError
from smartroute.services.geocoding.nominatim_client import NominatimClient
from smartroute.services.routing.osrm_client import check_health


async def _run() -> int:
    failures = 0
    print("=" * 60)
    print("SmartRoute external service check")
    print("=" * 60)
    print()

    print("1. Gemini configuration...")
    if settings.gemini_api_key:
        print(f"   [OK] SMARTROUTE_GEMINI_API_KEY set ({settings.gemini_api_key[:6]}...), model {settings.gemini_model}")
    else:
        print("   [ERROR] SMARTROUTE_GEMINI_API_KEY is not configured; import and optimization will fail")
        failures += 1
    print()

    print("2. OSRM mirrors...")
    mirrors = await check_health()
    for url, healthy in mirrors.items():
        print(f"   [{'OK' if healthy else 'ERROR'}] {url}")
    if not any(mirrors.values()):
        print("   All mirrors down: routes will be drawn as straight lines")
        failures += 1
    print()

    print("3. Nominatim geocoding...")
    try:
        matches = await NominatimClient().search("Siam Paragon, Bangkok")
        if matches:
            print(f"   [OK] {settings.nominatim_base_url} resolved test address to {matches[0].lat:.4f},{matches[0].lng:.4f}")
        else:
            print(f"   [WARN] {settings.nominatim_base_url} returned no match for the test address")
    except GeocodingError as exc:
        print(f"   [ERROR] {exc}")
        failures += 1
    print()

    print(f"Persisted state file: {settings.data_root / (settings.storage_key + '.json')}")
    return 1 if failures else 0


def main() -> int:
    return asyncio.run(_run())


if __name__ == "__main__":
    sys.exit(main())
