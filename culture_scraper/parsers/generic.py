import json
import re

from bs4 import BeautifulSoup

from culture_scraper import config

MICRODATA_NAME_RE = re.compile(r"""itemprop=["']name["'][^>]*>([^<]+)""", re.IGNORECASE)
MICRODATA_DATE_RE = re.compile(r"""itemprop=["']startDate["'][^>]*content=["']([^"']+)["']""", re.IGNORECASE)
CONTENT_ATTR_RE = re.compile(r"""content=["']([^"']+)["']""")


def _is_json_ld(type_attr):
    return bool(type_attr) and type_attr.lower() == "application/ld+json"


def _is_event_type(value):
    if isinstance(value, list):
        return "Event" in value
    return value == "Event"


def _graph_nodes(item):
    """
    Nodes to scan for one JSON-LD object: the members of its @graph when it
    has a truthy one (an empty list still counts), otherwise the object itself.
    """
    graph = item.get("@graph")
    if graph is None or (not graph and not isinstance(graph, (list, dict))):
        return [item]
    if isinstance(graph, list):
        return graph
    if isinstance(graph, dict):
        return [graph]
    return []


def _event_nodes(data):
    """Yield schema.org Event objects from one parsed JSON-LD payload."""
    items = data if isinstance(data, list) else [data]
    for item in items:
        if not isinstance(item, dict):
            continue

        for node in _graph_nodes(item):
            if isinstance(node, dict) and _is_event_type(node.get("@type")):
                yield node


def parse_json_ld(html):
    """
    Extract events from <script type="application/ld+json"> blocks.
    Blocks that fail to parse are skipped.
    """
    soup = BeautifulSoup(html, "html.parser")
    events = []
    for tag in soup.find_all("script", type=_is_json_ld):
        try:
            data = json.loads(tag.string or "")
        except (ValueError, RecursionError):
            continue

        for node in _event_nodes(data):
            location = node.get("location")
            events.append({
                "title": node.get("name") or node.get("headline") or "",
                "date": node.get("startDate") or node.get("datePublished") or "",
                "location": (location.get("name") or "") if isinstance(location, dict) else "",
                "url": node.get("url") or "",
            })
    return events


def parse_microdata(html, limit=None):
    """
    Fallback for pages without JSON-LD: pair itemprop="name" text with
    itemprop="startDate" content values.

    Pairing is by position only. The i-th name is matched with the i-th date
    even when they belong to different elements on the page.
    """
    limit = config.MAX_MICRODATA_ITEMS if limit is None else limit

    names = [m.group(1) for m in MICRODATA_NAME_RE.finditer(html)]
    dates = []
    for m in MICRODATA_DATE_RE.finditer(html):
        # first lowercase content attribute in the matched span wins
        content = CONTENT_ATTR_RE.search(m.group(0))
        dates.append(content.group(1) if content else "")

    events = []
    for i, name in enumerate(names[:limit]):
        events.append({
            "title": name.strip(),
            "date": dates[i] if i < len(dates) else "",
            "location": "",
            "url": "",
        })
    return events


def extract_events(html, limit=None):
    """Extract up to `limit` events, trying JSON-LD before microdata."""
    limit = config.MAX_EVENTS_PER_SOURCE if limit is None else limit

    events = parse_json_ld(html)
    if not events:
        events = parse_microdata(html)
    return events[:limit]
