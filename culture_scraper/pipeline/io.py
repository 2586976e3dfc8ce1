import json
import re
from datetime import datetime, timedelta, timezone

from culture_scraper import config

LOG_ENTRY_RE = re.compile(r"\[(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\]")


def trim_log_by_time(log_path, retention_days=None):
    """
    Remove log entries older than retention_days.
    Continuation lines (tracebacks) follow the entry they belong to.
    Returns list of lines to keep.
    """
    if retention_days is None:
        retention_days = config.LOG_RETENTION_DAYS
    if not log_path.exists():
        return []

    cutoff = datetime.now(timezone.utc) - timedelta(days=retention_days)
    cutoff_str = cutoff.strftime("%Y-%m-%d %H:%M:%S")

    kept_lines = []
    current_entry_recent = False

    with open(log_path, "r", encoding="utf-8") as f:
        for line in f:
            match = LOG_ENTRY_RE.match(line)
            if match:
                current_entry_recent = match.group(1) >= cutoff_str

            if current_entry_recent:
                kept_lines.append(line)

    return kept_lines


def _write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def write_report(report, path=None):
    """Write the run report, replacing whatever was there before."""
    _write_json(path or config.OUTPUT_PATH, report)


def save_status(status, path=None):
    _write_json(path or config.STATUS_PATH, status)


def save_log(log_lines, path=None):
    """Append this run's entries to the log file, dropping expired ones."""
    path = path or config.LOG_PATH
    existing_log = trim_log_by_time(path)
    log_content = existing_log + ["\n--- New Run ---\n"] + [line + "\n" for line in log_lines]

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.writelines(log_content)
