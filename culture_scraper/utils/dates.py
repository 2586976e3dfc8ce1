from datetime import datetime, timezone


def utc_timestamp(now=None):
    """
    ISO-8601 UTC timestamp with millisecond precision and a Z suffix,
    e.g. "2026-02-01T12:00:00.000Z".
    """
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def log_timestamp(now=None):
    """Timestamp prefix used for run log entries."""
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%d %H:%M:%S")
