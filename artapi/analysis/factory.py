from artapi.analysis.analyzer import ImageAnalyzer
from artapi.analysis.base import BaseAnalyzer
from artapi.analysis.example_client_adapter import ExampleClientAdapter
from artapi.analysis.openai_client_adapter import OpenAIClientAdapter
from artapi.config.settings import Settings


class AnalyzerFactory:
    """Creates the configured image analyzer."""

    PROVIDERS = ("example", "openai", "openai_compatible")

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalyzer:
        """Create a configured analyzer from application settings."""
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return ImageAnalyzer(client=ExampleClientAdapter(), model="example")
        client = OpenAIClientAdapter(
            api_key=settings.openai_api_key,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )
        return ImageAnalyzer(
            client=client,
            model=settings.openai_model_name,
            max_tokens=settings.openai_max_tokens,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = (settings.openai_compatible_base_url or "").strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for "
                    "analysis_provider=openai_compatible"
                )
            return url
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
