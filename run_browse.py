"""CLI entry point.

This script loads one or more pages of the Arbeitnow job board through the
browser pipeline, applies the given filters and prints the resulting job list
(or the details of a single job) as JSON.

Examples:
    python run_browse.py
    python run_browse.py --pages 3 --search engineer --remote-only
    python run_browse.py --pages 2 --location Berlin --out jobs.json
    python run_browse.py --cache-file ~/.cache/job_browser.json --show some-job-slug

Settings can also come from JOB_BROWSER_* environment variables.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from job_browser.controller import BrowserController
from job_browser.models import BrowserSnapshot, PipelineState
from job_browser.settings import settings


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Browse, filter and inspect Arbeitnow job postings.")
    p.add_argument("--pages", type=int, default=1, help="Number of pages to load (default 1).")
    p.add_argument("--search", type=str, default="", help="Case-insensitive title/company search.")
    p.add_argument("--location", type=str, default="", help="Exact location to keep.")
    p.add_argument("--remote-only", action="store_true", help="Only keep remote jobs.")
    p.add_argument("--show", type=str, default=None, metavar="SLUG", help="Print details for one job.")
    p.add_argument("--cache-file", type=str, default=settings.cache_file, help="Persist the page cache here.")
    p.add_argument("--out", type=str, default=None, help="Write the output JSON here instead of stdout.")
    p.add_argument("--log-level", type=str, default=settings.log_level, help="Logging level (default INFO).")
    return p.parse_args(argv)


async def browse(args: argparse.Namespace) -> dict:
    config = settings.model_copy(update={"cache_file": args.cache_file})
    controller = BrowserController.from_settings(config)

    def report(snap: BrowserSnapshot) -> None:
        if snap.status is not None:
            logging.getLogger("job_browser").info("[%s] %s", snap.state.value, snap.status.text)

    controller.subscribe(report)

    await controller.start()
    for _ in range(max(args.pages, 1) - 1):
        if controller.state is PipelineState.ERROR:
            break
        await controller.request_next_page()

    if args.show:
        return controller.open_details(args.show).model_dump(mode="json")

    controller.set_search_term(args.search)
    controller.set_location_filter(args.location)
    controller.set_remote_only(args.remote_only)

    snap = controller.snapshot()
    return {
        "state": snap.state.value,
        "status": snap.status.text if snap.status else None,
        "pages_loaded": snap.current_page,
        "total_loaded": snap.total_loaded,
        "locations": snap.locations,
        "message": snap.empty_message,
        "jobs": [card.model_dump(mode="json") for card in controller.cards()],
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    result = asyncio.run(browse(args))
    text = json.dumps(result, indent=2, ensure_ascii=False)

    if args.out:
        out_path = Path(args.out).expanduser().resolve()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        print(f"Wrote {len(result.get('jobs', []))} jobs to: {out_path}")
    else:
        print(text)

    return 1 if result.get("state") == PipelineState.ERROR.value else 0


if __name__ == "__main__":
    sys.exit(main())
