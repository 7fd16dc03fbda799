import httpx

from evalsummary.logging.logger import Log


class ApiClientError(Exception):
    """Raised when the summarizer server returns an error or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiTimeoutError(ApiClientError):
    """Raised when the server does not answer within the request timeout."""


class ApiClient:
    """HTTP client for the summarizer API."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 120,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def health(self) -> dict[str, str]:
        return self._send("GET", "/api/health")

    def test_key(self, api_key: str) -> bool:
        try:
            body = self._send("POST", "/api/test-key", json={"apiKey": api_key})
        except ApiClientError as exc:
            if exc.status_code in (400, 401):
                Log.warning(f"API key rejected: {exc}")
                return False
            raise
        return bool(body.get("valid"))

    def process_text(self, text: str, api_key: str, filename: str = "") -> str:
        body = self._send(
            "POST",
            "/api/process-text",
            json={"text": text, "apiKey": api_key, "filename": filename},
        )
        return str(body["result"])

    def upload(self, filename: str, content: bytes, api_key: str) -> str:
        return self._send_file("/api/upload", filename, content, api_key)

    def process_pdf_direct(self, filename: str, content: bytes, api_key: str) -> str:
        return self._send_file("/api/process-pdf-direct", filename, content, api_key)

    def _send_file(self, path: str, filename: str, content: bytes, api_key: str) -> str:
        body = self._send(
            "POST",
            path,
            files={"file": (filename, content, "application/pdf")},
            data={"apiKey": api_key},
        )
        return str(body["result"])

    def _send(self, method: str, path: str, **kwargs: object) -> dict:
        try:
            response = self._client.request(method, path, **kwargs)  # type: ignore[arg-type]
        except httpx.TimeoutException as exc:
            raise ApiTimeoutError(
                f"Request timed out after {self._timeout_seconds:g} seconds"
            ) from exc
        except httpx.HTTPError as exc:
            raise ApiClientError(f"Cannot reach server: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        if response.is_error:
            message = body.get("error") or f"Server returned HTTP {response.status_code}"
            raise ApiClientError(str(message), status_code=response.status_code)
        return body
