#!/usr/bin/env python3
"""
Scrape upcoming events from NYC cultural institutions and save to JSON.
Each institution's public calendar page is fetched and events are read from
its JSON-LD markup, falling back to schema.org microdata.

Outputs events.json for the static site, plus scrape-status.json and a
rolling scrape-log.txt next to it.
"""

import sys
import traceback

from culture_scraper import config
from culture_scraper.fetch import fetch
from culture_scraper.pipeline.aggregate import build_report, build_status, run_sources, summary_lines
from culture_scraper.pipeline.io import save_log, save_status, write_report
from culture_scraper.registry import SOURCES
from culture_scraper.utils.dates import log_timestamp, utc_timestamp


def main(sources=SOURCES, fetcher=fetch):
    run_timestamp = utc_timestamp()
    log_lines = []  # Collect log entries

    def log(message, level="INFO"):
        """Log a message to both console and log buffer."""
        log_entry = f"[{log_timestamp()}] [{level}] {message}"
        print(message)
        log_lines.append(log_entry)

    log(f"Starting scrape run at {run_timestamp}")

    results, statuses, metrics = run_sources(
        sources, fetcher=fetcher, log=log, run_timestamp=run_timestamp
    )

    for line in summary_lines(metrics):
        log(line)

    failed = [name for name, status in statuses.items() if not status["success"]]
    if failed:
        log(f"WARNING: Failed to fetch: {', '.join(failed)}", "WARNING")

    report = build_report(results, len(sources))
    write_report(report, config.OUTPUT_PATH)
    log(f"\nWrote events.json: {report['totalEvents']} events from {len(results)} sources")

    save_status(build_status(statuses, run_timestamp, report["totalEvents"]), config.STATUS_PATH)
    log(f"Status saved to {config.STATUS_PATH}")

    save_log(log_lines, config.LOG_PATH)

    return report


def cli():
    try:
        main()
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    cli()
