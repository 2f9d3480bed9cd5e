from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from artapi.storage.models import ArtPiece
from artapi.submission.models import SubmissionResult


class SubmissionResponse(BaseModel):
    id: str
    title: str
    tags: list[str]
    status: str

    @classmethod
    def from_result(cls, result: SubmissionResult) -> "SubmissionResponse":
        return cls(id=result.id, title=result.title, tags=result.tags, status=result.status)


class ArtPieceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    url: str
    title: str
    tags: list[str]
    uploaded_at: datetime | None = Field(default=None, alias="uploadedAt")

    @classmethod
    def from_piece(cls, piece: ArtPiece) -> "ArtPieceResponse":
        return cls(
            id=piece.id,
            url=piece.url,
            title=piece.title,
            tags=piece.tags,
            uploaded_at=piece.uploaded_at,
        )


class FavoritesResponse(BaseModel):
    pieces: list[ArtPieceResponse]
