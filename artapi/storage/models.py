from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from artapi.analysis.models import TAG_DELIMITER, AnalysisResult

TITLE_KEY = "title"
TAGS_KEY = "tags"
IS_FAVORITE_KEY = "isFavorite"
UPLOADED_AT_KEY = "uploadedAt"


def format_timestamp(moment: datetime) -> str:
    """RFC 3339 in UTC with second precision, e.g. 2024-05-01T12:00:00Z."""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_timestamp(value: str) -> datetime | None:
    """Parse an RFC 3339 timestamp; None when missing or malformed."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def split_tags(value: str) -> list[str]:
    return [tag.strip() for tag in value.split(TAG_DELIMITER) if tag.strip()]


@dataclass(frozen=True)
class ArtworkMetadata:
    """Application metadata attached to a stored image.

    Values are strings because object stores only hold string metadata.
    """

    title: str
    tags: str
    is_favorite: str = "false"
    uploaded_at: str = ""

    @classmethod
    def from_analysis(cls, analysis: AnalysisResult, uploaded_at: datetime) -> "ArtworkMetadata":
        return cls(
            title=analysis.title,
            tags=TAG_DELIMITER.join(analysis.tags),
            is_favorite="false",
            uploaded_at=format_timestamp(uploaded_at),
        )

    @classmethod
    def from_object_metadata(cls, raw: Mapping[str, str]) -> "ArtworkMetadata":
        """Decode store metadata. Keys are matched case-insensitively."""
        lowered = {key.lower(): value for key, value in raw.items()}
        return cls(
            title=lowered.get(TITLE_KEY.lower(), ""),
            tags=lowered.get(TAGS_KEY.lower(), ""),
            is_favorite=lowered.get(IS_FAVORITE_KEY.lower(), "false"),
            uploaded_at=lowered.get(UPLOADED_AT_KEY.lower(), ""),
        )

    def to_object_metadata(self) -> dict[str, str]:
        return {
            TITLE_KEY: self.title,
            TAGS_KEY: self.tags,
            IS_FAVORITE_KEY: self.is_favorite,
            UPLOADED_AT_KEY: self.uploaded_at,
        }

    @property
    def favorited(self) -> bool:
        return self.is_favorite == "true"

    def tag_list(self) -> list[str]:
        return split_tags(self.tags)


@dataclass(frozen=True)
class ArtPiece:
    """A favorited artwork as returned by the listing endpoint."""

    id: str
    url: str
    title: str
    tags: list[str]
    uploaded_at: datetime | None = None

    @classmethod
    def from_metadata(cls, object_id: str, url: str, metadata: ArtworkMetadata) -> "ArtPiece":
        return cls(
            id=object_id,
            url=url,
            title=metadata.title,
            tags=metadata.tag_list(),
            uploaded_at=parse_timestamp(metadata.uploaded_at),
        )
