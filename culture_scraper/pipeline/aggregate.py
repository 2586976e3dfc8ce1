import time
import traceback

from culture_scraper import config
from culture_scraper.fetch import FetchError, fetch
from culture_scraper.pipeline.metrics import SourceMetrics
from culture_scraper.registry import get_parsers
from culture_scraper.utils.console import print_log
from culture_scraper.utils.dates import utc_timestamp
from culture_scraper.utils.events import count_events, enrich_events


def scrape_source(source, fetcher=fetch, parsers=None):
    """Fetch one source and return its enriched, truncated events."""
    parsers = parsers or get_parsers()
    parser = parsers[source.parser]

    html = fetcher(source.url)
    events = parser(html)[:config.MAX_EVENTS_PER_SOURCE]
    return enrich_events(events, source, utc_timestamp())


def run_sources(sources, fetcher=fetch, parsers=None, log=print_log, run_timestamp=None):
    """
    Scrape every source in order, one at a time.
    A failing source is logged and treated as having no events.
    Returns (events_by_institution, source_statuses, source_metrics).
    """
    parsers = parsers or get_parsers()
    run_timestamp = run_timestamp or utc_timestamp()

    results = {}
    statuses = {}
    metrics = {}

    log(f"Fetching events from {len(sources)} institutions...")

    for source in sources:
        name = source.institution
        source_metrics = SourceMetrics(name=name)
        status = {
            "last_run": run_timestamp,
            "url": source.url,
            "success": False,
            "event_count": 0,
            "error": None,
        }
        start_time = time.time()
        events = []

        try:
            events = scrape_source(source, fetcher=fetcher, parsers=parsers)
            status["success"] = True
        except FetchError as e:
            source_metrics.errors = 1
            source_metrics.error_messages.append(str(e))
            status["error"] = str(e)
            log(f"Failed to fetch {name}: {e}", "WARNING")
        except Exception as e:
            source_metrics.errors = 1
            source_metrics.error_messages.append(str(e))
            status["error"] = str(e)
            log(f"Failed to fetch {name}: {e}", "ERROR")
            log(f"  Traceback:\n{traceback.format_exc()}", "ERROR")

        source_metrics.duration_ms = (time.time() - start_time) * 1000
        source_metrics.event_count = len(events)
        status["event_count"] = len(events)

        if events:
            results[name] = events
            log(f"  ✓ {name}: {len(events)} events")
        else:
            log(f"  ✗ {name}: no events found (will use fallback)")

        statuses[name] = status
        metrics[name] = source_metrics

    return results, statuses, metrics


def build_report(results, source_count, last_updated=None):
    """Assemble the events.json document for one run."""
    return {
        "lastUpdated": last_updated or utc_timestamp(),
        "sources": source_count,
        "totalEvents": count_events(results),
        "events": results,
    }


def build_status(statuses, run_timestamp, total_events):
    """Assemble the scrape-status.json document for one run."""
    return {
        "last_run": run_timestamp,
        "all_success": all(s["success"] for s in statuses.values()),
        "any_success": any(s["success"] for s in statuses.values()),
        "total_events": total_events,
        "sources": statuses,
    }


def summary_lines(metrics):
    """Per-source summary table, in registry order."""
    lines = [
        "",
        "=" * 64,
        "SOURCE SUMMARY",
        "=" * 64,
        f"{'Institution':<40} {'Events':>7} {'Errors':>7} {'Time':>7}",
        "-" * 64,
    ]
    for m in metrics.values():
        time_str = f"{m.duration_ms:.0f}ms"
        lines.append(f"{m.name[:40]:<40} {m.event_count:>7} {m.errors:>7} {time_str:>7}")
    lines.append("-" * 64)
    total_events = sum(m.event_count for m in metrics.values())
    total_errors = sum(m.errors for m in metrics.values())
    total_time = sum(m.duration_ms for m in metrics.values())
    lines.append(f"{'TOTAL':<40} {total_events:>7} {total_errors:>7} {total_time:.0f}ms")
    lines.append("=" * 64)
    return lines
