"""Seed script for development data.

Run with:  python -m shiftcal.seed
"""

from __future__ import annotations

import asyncio
import sys
from typing import Any

import httpx

BASE_URL = "http://localhost:8000"
DEMO_USER_ID = "00000000-0000-0000-0000-000000000001"

HEADERS = {
    "Content-Type": "application/json",
    "X-User-Id": DEMO_USER_ID,
}

DEMO_PROFILE: dict[str, Any] = {
    "station_name": "서울역",
    "team_name": "C조",
    "total_annual_leave": 15,
    "used_annual_leave": 0,
    "total_sick_leave": 5,
    "used_sick_leave": 0,
    "total_special_leave": 3,
    "used_special_leave": 0,
    "used_extra_days_off": 0,
}

# (date, shift_type, payment, label) for C조 in January 2025.
DEMO_SHIFTS: list[tuple[str, str, str, str]] = [
    ("2025-01-06", "annual", "single", "Annual leave on a day shift"),
    ("2025-01-07", "sick", "single", "Sick leave on a night shift (covers 01-08)"),
    ("2025-01-10", "holiday", "single", "Extra day off on a day shift"),
]


async def _safe_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    json: dict[str, Any],
    label: str,
) -> dict[str, Any] | None:
    """Send a request and report the outcome; 409 means already applied or not allowed."""
    resp = await client.request(method, url, json=json, headers=HEADERS)
    if resp.status_code in (200, 201):
        print(f"  [OK] {label}")
        body: dict[str, Any] = resp.json()
        return body
    if resp.status_code == 409:
        print(f"  [SKIP] {label} ({resp.json().get('detail')})")
        return None
    print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")
    return None


async def seed_profile(client: httpx.AsyncClient) -> dict[str, Any] | None:
    """Seed the demo profile via PUT (full replace)."""
    print("\n--- Seeding profile ---")
    return await _safe_request(client, "PUT", "/profile", DEMO_PROFILE, f"{DEMO_PROFILE['team_name']} profile")


async def seed_shifts(client: httpx.AsyncClient) -> int:
    """Apply the demo shift changes and return how many succeeded."""
    print("\n--- Seeding shift changes ---")
    applied = 0
    for day, shift_type, payment, label in DEMO_SHIFTS:
        result = await _safe_request(
            client,
            "POST",
            "/schedules",
            {"date": day, "shift_type": shift_type, "payment": payment},
            label,
        )
        if result is not None:
            applied += 1
    return applied


async def main() -> None:
    print("=" * 60)
    print("  Shift Calendar: Development Seed Script")
    print("=" * 60)

    async with httpx.AsyncClient(base_url=BASE_URL, timeout=30.0) as client:
        try:
            resp = await client.get("/health")
            if resp.status_code != 200:
                print(f"API health check failed: {resp.status_code}")
                sys.exit(1)
            print("\n[OK] API is healthy")
        except httpx.ConnectError:
            print("ERROR: Cannot connect to API at", BASE_URL)
            sys.exit(1)

        await seed_profile(client)
        await seed_shifts(client)

    print("\n" + "=" * 60)
    print("  Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
