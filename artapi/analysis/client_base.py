from abc import ABC, abstractmethod


class BaseVisionClient(ABC):
    """Contract for provider-specific multimodal chat clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        max_tokens: int,
        prompt: str,
        image_data_url: str,
    ) -> str:
        """Send the prompt together with the image and return the reply text."""
