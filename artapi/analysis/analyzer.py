"""AI-powered artwork titling and tagging."""

import base64
import json
from pathlib import Path
from typing import Any

from artapi.analysis.base import BaseAnalyzer
from artapi.analysis.client_base import BaseVisionClient
from artapi.analysis.exceptions import AnalysisResponseError
from artapi.analysis.models import TAG_DELIMITER, AnalysisResult
from artapi.analysis.prompt_loader import load_prompt
from artapi.concurrency.cancel_scope import CancelScope
from artapi.logging.logger import Log

_IMAGE_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def sniff_image_mime_type(data: bytes) -> str:
    """Best-effort MIME type from magic bytes; PNG when unrecognized."""
    for signature, mime_type in _IMAGE_SIGNATURES:
        if data.startswith(signature):
            return mime_type
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return "image/png"


class ImageAnalyzer(BaseAnalyzer):
    """Asks a vision model for a title and tags, then validates its reply."""

    def __init__(
        self,
        *,
        client: BaseVisionClient,
        model: str,
        max_tokens: int = 100,
        prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._max_tokens = max_tokens
        self._prompt = load_prompt(prompt_path)

    def analyze_image(
        self, data: bytes, scope: CancelScope | None = None
    ) -> AnalysisResult:
        if scope is not None:
            scope.raise_if_cancelled()

        raw_response = self._client.create_chat_completion(
            model=self._model,
            max_tokens=self._max_tokens,
            prompt=self._prompt,
            image_data_url=self._data_url(data),
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        result = self._build_result(self._parse_json(raw_response))
        Log.info(f"Analysis complete: '{result.title}' with {len(result.tags)} tags")
        return result

    @staticmethod
    def _data_url(data: bytes) -> str:
        encoded = base64.b64encode(data).decode("ascii")
        return f"data:{sniff_image_mime_type(data)};base64,{encoded}"

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise AnalysisResponseError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise AnalysisResponseError("JSON response must be an object")
        return parsed

    @staticmethod
    def _build_result(data: dict[str, Any]) -> AnalysisResult:
        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            raise AnalysisResponseError("'title' must be a non-empty string")

        raw_tags = data.get("tags")
        if isinstance(raw_tags, str):
            candidates = raw_tags.split(TAG_DELIMITER)
        elif isinstance(raw_tags, list) and all(isinstance(t, str) for t in raw_tags):
            # tags are stored joined by the delimiter, so it may not appear inside one
            candidates = [part for tag in raw_tags for part in tag.split(TAG_DELIMITER)]
        else:
            raise AnalysisResponseError("'tags' must be a comma-separated string")

        tags = [tag.strip() for tag in candidates if tag.strip()]
        if not tags:
            raise AnalysisResponseError("'tags' must contain at least one tag")
        return AnalysisResult(title=title.strip(), tags=tags)
