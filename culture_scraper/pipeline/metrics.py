from dataclasses import dataclass, field


@dataclass
class SourceMetrics:
    """Track scraping metrics for each source."""
    name: str
    event_count: int = 0
    errors: int = 0
    error_messages: list = field(default_factory=list)
    duration_ms: float = 0.0
