"""Tests for AnalyzerFactory."""

from unittest.mock import patch

import pytest

from artapi.analysis.analyzer import ImageAnalyzer
from artapi.analysis.base import BaseAnalyzer
from artapi.analysis.factory import AnalyzerFactory
from artapi.config.settings import Settings


class TestAnalyzerFactory:
    def test_creates_example_analyzer(self, sample_png_bytes: bytes) -> None:
        analyzer = AnalyzerFactory.create(Settings(analysis_provider="example"))
        assert isinstance(analyzer, BaseAnalyzer)
        assert analyzer.analyze_image(sample_png_bytes).tags

    def test_uses_openai_settings(self) -> None:
        settings = Settings(
            analysis_provider="openai",
            openai_api_key="openai-key",
            openai_model_name="gpt-4o-mini",
            openai_timeout_seconds=42,
        )
        with patch("artapi.analysis.factory.OpenAIClientAdapter") as mock_adapter:
            analyzer = AnalyzerFactory.create(settings)
        assert isinstance(analyzer, ImageAnalyzer)
        mock_adapter.assert_called_once_with(
            api_key="openai-key",
            timeout_seconds=42,
            base_url=None,
        )

    def test_uses_custom_base_url_for_openai_compatible(self) -> None:
        settings = Settings(
            analysis_provider="openai_compatible",
            openai_api_key="k",
            openai_compatible_base_url="https://example.com/v1",
        )
        with patch("artapi.analysis.factory.OpenAIClientAdapter") as mock_adapter:
            AnalyzerFactory.create(settings)
        assert mock_adapter.call_args.kwargs["base_url"] == "https://example.com/v1"

    def test_openai_compatible_requires_base_url(self) -> None:
        settings = Settings(analysis_provider="openai_compatible")
        with pytest.raises(ValueError, match="openai_compatible_base_url"):
            AnalyzerFactory.create(settings)

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown analysis provider"):
            AnalyzerFactory.create(Settings(analysis_provider="nope"))
