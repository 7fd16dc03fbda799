from typing import ClassVar

from evalsummary.config.settings import Settings
from evalsummary.summarization.anthropic_client_adapter import AnthropicClientAdapter
from evalsummary.summarization.base import BaseSummarizer
from evalsummary.summarization.client_base import BaseSummarizationClient
from evalsummary.summarization.example_client_adapter import ExampleClientAdapter
from evalsummary.summarization.openai_client_adapter import OpenAIClientAdapter
from evalsummary.summarization.summarizer import ClientFactory, Summarizer


class SummarizerFactory:
    """Creates the configured summarizer."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    CREDENTIAL_PREFIXES: ClassVar[dict[str, str]] = {
        "anthropic": "sk-ant-",
        "openai": "sk-",
        "openrouter": "sk-or-",
        "groq": "gsk_",
        "deepseek": "sk-",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseSummarizer:
        """Create a configured summarizer from application settings."""
        provider = settings.summarization_provider.lower()
        return Summarizer(
            client_factory=cls.client_factory(provider, settings),
            model=cls._resolve_model_name(provider, settings),
            temperature=settings.summarization_temperature,
            max_tokens=settings.summarization_max_tokens,
            document_max_tokens=settings.summarization_document_max_tokens,
        )

    @classmethod
    def client_factory(cls, provider: str, settings: Settings) -> ClientFactory:
        """Return a callable building a provider client for one API key."""
        timeout = settings.summarization_timeout_seconds
        if provider == "example":
            return ExampleClientAdapter
        if provider == "anthropic":

            def _anthropic(api_key: str) -> BaseSummarizationClient:
                return AnthropicClientAdapter(
                    api_key=api_key,
                    timeout_seconds=timeout,
                    base_url=settings.anthropic_base_url,
                    api_version=settings.anthropic_version,
                )

            return _anthropic

        base_url = cls._resolve_base_url(provider, settings)

        def _openai(api_key: str) -> BaseSummarizationClient:
            return OpenAIClientAdapter(
                api_key=api_key,
                timeout_seconds=timeout,
                base_url=base_url,
            )

        return _openai

    @classmethod
    def credential_prefix(cls, settings: Settings) -> str:
        """Return the API key prefix expected for the configured provider.

        Providers without a documented key format accept any prefix.
        """
        if settings.credential_prefix is not None:
            return settings.credential_prefix
        return cls.CREDENTIAL_PREFIXES.get(settings.summarization_provider.lower(), "")

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for "
                    "summarization_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "anthropic",
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown summarization provider '{provider}'. Choose from: {supported}"
        )

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        if provider == "example":
            return "example"
        if provider == "anthropic":
            return settings.anthropic_model_name
        if provider == "openai":
            return settings.openai_model_name
        return settings.openai_compatible_model_name or settings.openai_model_name
