from pathlib import Path

from culture_scraper.parsers.generic import extract_events, parse_json_ld, parse_microdata

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"


def jsonld(payload):
    return f'<html><head><script type="application/ld+json">{payload}</script></head><body></body></html>'


def test_single_jsonld_event():
    html = jsonld('{"@context": "https://schema.org", "@type": "Event", "name": "Gala", "startDate": "2024-05-01"}')
    events = extract_events(html)
    assert events == [{"title": "Gala", "date": "2024-05-01", "location": "", "url": ""}]


def test_jsonld_fixture_lists_graph_and_type_arrays():
    events = parse_json_ld((FIXTURES / "jsonld_calendar.html").read_text())

    assert [e["title"] for e in events] == ["Spring Gala", "Chamber Series", "Family Day"]
    assert events[0] == {
        "title": "Spring Gala",
        "date": "2026-05-01T19:00",
        "location": "Main Hall",
        "url": "https://example.org/events/gala",
    }
    # headline / datePublished fallbacks
    assert events[1]["date"] == "2026-05-03"
    # location given as a plain string has no name
    assert events[2]["location"] == ""


def test_jsonld_type_must_match_exactly():
    html = jsonld('[{"@type": "MusicEvent", "name": "A"}, {"@type": "Event", "name": "B"}]')
    assert [e["title"] for e in parse_json_ld(html)] == ["B"]


def test_jsonld_malformed_block_skipped_others_kept():
    html = (
        '<script type="application/ld+json">{broken</script>'
        '<script type="application/ld+json">{"@type": "Event", "name": "Survivor"}</script>'
    )
    assert [e["title"] for e in parse_json_ld(html)] == ["Survivor"]


def test_jsonld_type_attribute_case_insensitive():
    html = '<script type="Application/LD+JSON">{"@type": "Event", "name": "Loud"}</script>'
    assert parse_json_ld(html)[0]["title"] == "Loud"


def test_jsonld_ignores_non_object_entries():
    html = jsonld('[null, 3, "x", {"@type": "Event", "name": "Real"}]')
    assert [e["title"] for e in parse_json_ld(html)] == ["Real"]


def test_jsonld_graph_replaces_container():
    html = jsonld('{"@type": "Event", "name": "Container", "@graph": [{"@type": "Event", "name": "Inner"}]}')
    assert [e["title"] for e in parse_json_ld(html)] == ["Inner"]


def test_microdata_fixture_pairs_by_position():
    events = extract_events((FIXTURES / "microdata_calendar.html").read_text())
    assert events == [
        {"title": "Poetry Night", "date": "2026-03-01T18:00", "location": "", "url": ""},
        {"title": "Film Screening", "date": "2026-03-02", "location": "", "url": ""},
        {"title": "Gallery Talk", "date": "2026-03-03", "location": "", "url": ""},
    ]


def test_microdata_missing_dates_are_empty():
    html = (
        '<span itemprop="name">One</span><meta itemprop="startDate" content="2026-01-01">'
        '<span itemprop="name">Two</span>'
    )
    assert parse_microdata(html) == [
        {"title": "One", "date": "2026-01-01", "location": "", "url": ""},
        {"title": "Two", "date": "", "location": "", "url": ""},
    ]


def test_microdata_pairing_is_positional_not_semantic():
    # the first event has no date, so the second event's date shifts onto it
    html = (
        '<div><span itemprop="name">Undated</span></div>'
        '<div><span itemprop="name">Dated</span><meta itemprop="startDate" content="2026-02-02"></div>'
    )
    events = parse_microdata(html)
    assert events[0] == {"title": "Undated", "date": "2026-02-02", "location": "", "url": ""}
    assert events[1]["date"] == ""


def test_microdata_capped_at_ten():
    html = "".join(f'<span itemprop="name">Event {i}</span>' for i in range(15))
    events = parse_microdata(html)
    assert len(events) == 10
    assert events[-1]["title"] == "Event 9"


def test_microdata_not_used_when_jsonld_found():
    events = extract_events((FIXTURES / "jsonld_calendar.html").read_text())
    assert "Ignored Microdata Event" not in [e["title"] for e in events]


def test_malformed_jsonld_and_no_microdata_is_empty():
    assert extract_events((FIXTURES / "empty_calendar.html").read_text()) == []


def test_extract_events_truncates_to_eight():
    blocks = ",".join(f'{{"@type": "Event", "name": "E{i}"}}' for i in range(12))
    events = extract_events(jsonld(f"[{blocks}]"))
    assert len(events) == 8
    assert events[0]["title"] == "E0"
    assert events[-1]["title"] == "E7"


def test_jsonld_too_deeply_nested_block_skipped():
    nested = "[" * 100000 + "]" * 100000
    html = (
        f'<script type="application/ld+json">{nested}</script>'
        '<script type="application/ld+json">{"@type": "Event", "name": "Survivor"}</script>'
    )
    assert [e["title"] for e in extract_events(html)] == ["Survivor"]


def test_jsonld_empty_graph_scans_nothing():
    html = jsonld('{"@type": "Event", "name": "Container", "@graph": []}')
    assert parse_json_ld(html) == []


def test_jsonld_null_graph_scans_container():
    html = jsonld('{"@type": "Event", "name": "Container", "@graph": null}')
    assert [e["title"] for e in parse_json_ld(html)] == ["Container"]
