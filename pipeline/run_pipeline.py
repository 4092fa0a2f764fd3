"""
Pipeline entry point: ingestion followed by a notification cycle.

Usage:
    # One full cycle (scrape, then notify)
    uv run python -m pipeline.run_pipeline

    # Only one stage
    uv run python -m pipeline.run_pipeline --scrape-only
    uv run python -m pipeline.run_pipeline --notify-only

    # Keep running on a fixed period (default every 6 hours)
    uv run python -m pipeline.run_pipeline --loop --interval-hours 6
"""

import argparse
import threading
import time
from datetime import datetime
from typing import Any

from supabase import Client

from config.settings import CYCLE_INTERVAL_HOURS
from ingest.scrape_events import scrape_all_events
from notifications.dispatcher import run_notification_cycle
from shared.error_logger import log_pipeline_error


class PipelineRunner:
    """
    Runs pipeline cycles with a single-flight guard.

    A trigger that arrives while a cycle is still running is skipped rather
    than started alongside it.
    """

    def __init__(self, supabase: Client | None = None):
        self.supabase = supabase
        self.cycles_run = 0
        self.cycles_skipped = 0
        self.notifications_sent = 0
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    def run_cycle(
        self, scrape: bool = True, notify: bool = True, dry_run: bool = False
    ) -> dict[str, Any] | None:
        """
        Run one cycle unless another one is in progress.

        Ingestion and notification are isolated from each other: a failed
        scrape still lets already-stored events be matched and sent.

        Returns:
            Stats per stage, or None when the trigger was skipped
        """
        if not self._lock.acquire(blocking=False):
            self.cycles_skipped += 1
            print(f"[{datetime.now()}] ⊘ Cycle already running, skipping trigger")
            return None

        try:
            print(f"\n[{datetime.now()}] 🔔 Starting pipeline cycle...")
            result: dict[str, Any] = {"ingestion": None, "notifications": None}

            if scrape:
                result["ingestion"] = self._run_stage(
                    "ingestion", lambda: scrape_all_events(supabase=self.supabase)
                )

            if notify:
                result["notifications"] = self._run_stage(
                    "notifications",
                    lambda: run_notification_cycle(supabase=self.supabase, dry_run=dry_run),
                )
                if result["notifications"]:
                    self.notifications_sent += result["notifications"]["sent"]

            self.cycles_run += 1
            print(
                f"[{datetime.now()}] ✅ Cycles run: {self.cycles_run}, "
                f"notifications sent: {self.notifications_sent}"
            )
            return result
        finally:
            self._lock.release()

    @staticmethod
    def _run_stage(name: str, stage) -> dict[str, int] | None:
        try:
            return stage()
        except Exception as e:
            error_file = log_pipeline_error(
                error_type="cycle",
                error_message=str(e),
                context={"stage": name},
            )
            print(f"✗ Stage {name} failed. Details logged to: {error_file}")
            return None

    def run_forever(
        self,
        interval_hours: float = CYCLE_INTERVAL_HOURS,
        scrape: bool = True,
        notify: bool = True,
        dry_run: bool = False,
    ) -> None:
        """Run a cycle now and then on every interval until interrupted."""
        interval_seconds = interval_hours * 3600
        print(f"✅ Pipeline scheduler started (every {interval_hours:g} hours)")

        while True:
            started = time.monotonic()
            self.run_cycle(scrape=scrape, notify=notify, dry_run=dry_run)
            elapsed = time.monotonic() - started
            time.sleep(max(0.0, interval_seconds - elapsed))


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Run the event notification pipeline")

    stage = parser.add_mutually_exclusive_group()
    stage.add_argument("--scrape-only", action="store_true", help="Only ingest events")
    stage.add_argument("--notify-only", action="store_true", help="Only send notifications")

    parser.add_argument("--loop", action="store_true", help="Repeat on a fixed period")
    parser.add_argument(
        "--interval-hours",
        type=float,
        default=CYCLE_INTERVAL_HOURS,
        help="Period between cycles when looping (default from CYCLE_INTERVAL_HOURS)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Dry run mode (don't actually send messages)",
    )

    args = parser.parse_args()

    scrape = not args.notify_only
    notify = not args.scrape_only
    runner = PipelineRunner()

    if args.loop:
        try:
            runner.run_forever(args.interval_hours, scrape=scrape, notify=notify, dry_run=args.dry_run)
        except KeyboardInterrupt:
            print(f"\nStopped after {runner.cycles_run} cycles")
    else:
        runner.run_cycle(scrape=scrape, notify=notify, dry_run=args.dry_run)


if __name__ == "__main__":
    main()
