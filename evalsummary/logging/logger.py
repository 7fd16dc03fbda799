import logging
import sys


class Log:
    """Centralized logging with structured format.

    Keyword fields are rendered after the message as ``key=value`` pairs and
    are also attached to the record under ``fields`` so that a handler added
    by the caller can forward them as structured data.
    """

    _logger: logging.Logger = logging.getLogger("evalsummary")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **fields: object) -> None:
        cls._log(logging.INFO, message, fields)

    @classmethod
    def error(cls, message: str, **fields: object) -> None:
        cls._log(logging.ERROR, message, fields)

    @classmethod
    def warning(cls, message: str, **fields: object) -> None:
        cls._log(logging.WARNING, message, fields)

    @classmethod
    def debug(cls, message: str, **fields: object) -> None:
        cls._log(logging.DEBUG, message, fields)

    @classmethod
    def exception(cls, message: str, **fields: object) -> None:
        """Log an error together with the traceback of the active exception."""
        cls._log(logging.ERROR, message, fields, exc_info=True)

    @classmethod
    def _log(
        cls,
        level: int,
        message: str,
        fields: dict[str, object],
        exc_info: bool = False,
    ) -> None:
        if not cls._logger.isEnabledFor(level):
            return
        if fields:
            rendered = " ".join(f"{key}={value!r}" for key, value in fields.items())
            message = f"{message} [{rendered}]"
        cls._logger.log(level, message, extra={"fields": fields}, exc_info=exc_info)
