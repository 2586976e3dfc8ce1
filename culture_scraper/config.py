from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
EVENTS_DIR = REPO_ROOT
OUTPUT_PATH = EVENTS_DIR / "events.json"
STATUS_PATH = EVENTS_DIR / "scrape-status.json"
LOG_PATH = EVENTS_DIR / "scrape-log.txt"

LOG_RETENTION_DAYS = 14

USER_AGENT = "Mozilla/5.0 (compatible; EventBot/1.0)"
FETCH_HEADERS = {"User-Agent": USER_AGENT}
FETCH_TIMEOUT = 15
MAX_REDIRECTS = 10
MAX_RESPONSE_BYTES = None  # no cap

MAX_EVENTS_PER_SOURCE = 8
MAX_MICRODATA_ITEMS = 10
