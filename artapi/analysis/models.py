from dataclasses import dataclass, field

TAG_DELIMITER = ","


@dataclass(frozen=True)
class AnalysisResult:
    """Title and tags produced for one submitted image."""

    title: str
    tags: list[str] = field(default_factory=list)
