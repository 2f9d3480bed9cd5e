"""Example vision client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseVisionClient and register the provider in AnalyzerFactory.
"""

import json
from typing import ClassVar

from artapi.analysis.client_base import BaseVisionClient


class ExampleClientAdapter(BaseVisionClient):
    """Returns a fixed, well-formed analysis reply without any network calls.

    Lets the service run locally end to end (ANALYSIS_PROVIDER=example).
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, str]] = {
        "title": "Quiet Neon Study",
        "tags": "abstract,vibrant,digital",
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        max_tokens: int,
        prompt: str,
        image_data_url: str,
    ) -> str:
        _ = model, max_tokens, prompt, image_data_url
        return json.dumps(self.DEFAULT_RESPONSE)
