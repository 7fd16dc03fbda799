from evalsummary.config.settings import Settings
from evalsummary.credentials.exceptions import MalformedCredentialError
from evalsummary.logging.logger import Log
from evalsummary.summarization.base import BaseSummarizer
from evalsummary.summarization.factory import SummarizerFactory


class CredentialValidator:
    """Checks user-supplied API keys.

    Format checks are local. Liveness is established by a minimal probe call
    through the configured summarizer.
    """

    def __init__(self, summarizer: BaseSummarizer, prefix: str = "sk-ant-", min_length: int = 20) -> None:
        self._summarizer = summarizer
        self._prefix = prefix
        self._min_length = min_length

    @classmethod
    def from_settings(cls, settings: Settings, summarizer: BaseSummarizer) -> "CredentialValidator":
        return cls(
            summarizer,
            prefix=SummarizerFactory.credential_prefix(settings),
            min_length=settings.credential_min_length,
        )

    def is_well_formed(self, credential: str) -> bool:
        return credential.startswith(self._prefix) and len(credential) > self._min_length

    def ensure_well_formed(self, credential: str) -> None:
        if not self.is_well_formed(credential):
            Log.warning("Rejected malformed API key", length=len(credential))
            raise MalformedCredentialError()

    def is_live(self, credential: str) -> bool:
        if not self.is_well_formed(credential):
            return False
        live = self._summarizer.probe(credential)
        Log.info("API key probe finished", valid=live)
        return live
