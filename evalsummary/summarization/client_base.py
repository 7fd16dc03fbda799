from abc import ABC, abstractmethod


class BaseSummarizationClient(ABC):
    """Contract for provider-specific AI clients."""

    @abstractmethod
    def create_message(
        self,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        prompt: str,
        document: bytes | None = None,
    ) -> str:
        """Send one user turn and return the provider's reply as plain text.

        When *document* is given it is attached as a PDF alongside the prompt.
        """
