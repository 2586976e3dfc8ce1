def enrich_events(events, source, fetched_at):
    """
    Attach institution, source URL and fetch time to extracted events.
    Every event from one fetch gets the same fetched_at value.
    """
    return [
        {
            **event,
            "institution": source.institution,
            "source": source.url,
            "fetchedAt": fetched_at,
        }
        for event in events
    ]


def count_events(events_by_institution):
    return sum(len(events) for events in events_by_institution.values())
