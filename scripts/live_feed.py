#!/usr/bin/env python3
"""Run the telemetry engine and print what the map would redraw.

Seeds the demo fleet, starts the simulator, and every render interval
prints the create/update/remove plan plus the latest fleet summary.

Usage
-----
::

    export NETSENTRY_API_KEY="..."        # optional; fallbacks are used without it
    python scripts/live_feed.py --seconds 10

Options::

    --seconds N          How long to stay active (default: 10)
    --render-every S     Seconds between render passes (default: 1.0)
    --local              Use the local facility projection instead of the tile map
    --scan MAC           Classify and register MAC before starting (repeatable)
    --json               Print plans as JSON lines
    -v                   Debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from netsentry import FleetTracker, ProjectionMode, RenderPlan, SentryConfig  # noqa: E402
from netsentry.projection import GeoPoint  # noqa: E402


def _position(plan: RenderPlan, device_id: str) -> dict[str, Any]:
    position = plan.markers[device_id].position
    if isinstance(position, GeoPoint):
        return {"lat": round(position.lat, 6), "lng": round(position.lng, 6)}
    return {"x": round(position.x, 3), "y": round(position.y, 3)}


def _plan_to_dict(plan: RenderPlan) -> dict[str, Any]:
    return {
        "create": {i: _position(plan, i) for i in plan.to_create},
        "update": {i: _position(plan, i) for i in plan.to_update},
        "remove": list(plan.to_remove),
    }


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, Any] = {}
    if args.local:
        overrides["projection_mode"] = ProjectionMode.LOCAL
    config = SentryConfig.from_env(**overrides)

    async with FleetTracker(config) as tracker:
        for identifier in args.scan:
            device = await tracker.scan(identifier)
            print(f"registered {device.id}: {device.name} risk={device.risk_level}")

        await tracker.activate()
        print(f"summary: {tracker.status_report}")

        loop = asyncio.get_running_loop()
        deadline = loop.time() + args.seconds
        while loop.time() < deadline:
            plan = tracker.render()
            if args.json:
                print(json.dumps(_plan_to_dict(plan)))
            elif not plan.is_empty:
                print(
                    f"tick={tracker.simulator.ticks} create={list(plan.to_create)} "
                    f"update={list(plan.to_update)} remove={list(plan.to_remove)}"
                )
            await asyncio.sleep(args.render_every)

        await tracker.deactivate()
        stats = tracker.stats()
        print(f"done: total={stats.total} at_risk={stats.at_risk} online={stats.online}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--seconds", type=float, default=10.0)
    parser.add_argument("--render-every", type=float, default=1.0)
    parser.add_argument("--local", action="store_true")
    parser.add_argument("--scan", action="append", default=[])
    parser.add_argument("--json", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
