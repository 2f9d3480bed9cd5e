from dataclasses import dataclass, field

PROCESSED_STATUS = "processed"


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a successful submission; derived, never persisted."""

    id: str
    title: str
    tags: list[str] = field(default_factory=list)
    status: str = PROCESSED_STATUS
