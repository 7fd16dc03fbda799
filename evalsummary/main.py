import uvicorn

from evalsummary.api.app import create_app
from evalsummary.config.settings import Settings
from evalsummary.logging.logger import Log


def serve(settings: Settings, host: str | None = None, port: int | None = None) -> None:
    """Entry point: configure logging -> build the API -> serve it with uvicorn."""
    Log.configure(settings.log_level)
    app = create_app(settings)
    bind_host = host or settings.host
    bind_port = port or settings.port
    Log.info(f"Starting server on http://{bind_host}:{bind_port}")
    uvicorn.run(app, host=bind_host, port=bind_port, log_level=settings.log_level.lower())


def main() -> None:
    serve(Settings())


if __name__ == "__main__":
    main()
