import logging
from typing import Any, Dict, Mapping, Optional


class AppLogger:
    """Stdlib logger wrapper that carries bound key/value context.

    Records are rendered as ``message | key=value key=value`` so that the
    context stays readable in plain console output.
    """

    def __init__(
        self,
        name: str,
        context: Optional[Mapping[str, Any]] = None,
        _logger: Optional[logging.Logger] = None,
    ):
        self.name = name
        self._logger = _logger or logging.getLogger(name)
        self._context: Dict[str, Any] = dict(context or {})

    @property
    def context(self) -> Dict[str, Any]:
        return dict(self._context)

    def bind(self, **extra: Any) -> "AppLogger":
        """Return a child logger whose context also holds ``extra``."""
        return AppLogger(self.name, {**self._context, **extra}, _logger=self._logger)

    def debug(self, message: str, **context: Any) -> None:
        self._emit(logging.DEBUG, message, context)

    def info(self, message: str, **context: Any) -> None:
        self._emit(logging.INFO, message, context)

    def warning(self, message: str, **context: Any) -> None:
        self._emit(logging.WARNING, message, context)

    def error(self, message: str, **context: Any) -> None:
        self._emit(logging.ERROR, message, context)

    def exception(self, message: str, **context: Any) -> None:
        self._emit(logging.ERROR, message, context, exc_info=True)

    def _emit(
        self,
        level: int,
        message: str,
        context: Mapping[str, Any],
        exc_info: bool = False,
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        merged = {**self._context, **context}
        self._logger.log(level, render(message, merged), exc_info=exc_info)


def render(message: str, context: Mapping[str, Any]) -> str:
    if not context:
        return message
    pairs = " ".join(f"{key}={_as_text(value)}" for key, value in context.items())
    return f"{message} | {pairs}"


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, (str, int, float, bool)):
        return str(value)
    return repr(value)


def get_logger(name: str) -> AppLogger:
    return AppLogger(name)
