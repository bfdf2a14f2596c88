"""JSON-lines logging on top of loguru.

Every line carries a ``trace_id`` plus the ``network`` and ``error_code`` of the
decision being logged; any other bound values are grouped under ``context``::

    {"timestamp": "...", "level": "WARNING", "message": "Pricing record has missing rates",
     "trace_id": "3f2a...", "error_code": "MISSING_RATES", "network": "testnet",
     "context": {"pr_timestamp": 9}}
"""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import IO, Any, Iterator
from uuid import uuid4

from loguru import logger
from loguru._logger import Logger as _LoguruLogger  # type: ignore[attr-defined]

from prguard.core.logging.config import LogConfig

TOP_LEVEL_FIELDS = ("network", "error_code")
_RESERVED = frozenset({"trace_id", *TOP_LEVEL_FIELDS})

_trace_id: ContextVar[str | None] = ContextVar("prguard_trace_id", default=None)
_scope: ContextVar[dict[str, Any]] = ContextVar("prguard_log_scope", default={})


def current_trace_id() -> str:
    """Return the active trace id, starting a new trace when none is set."""

    trace_id = _trace_id.get()
    if trace_id is None:
        trace_id = uuid4().hex
        _trace_id.set(trace_id)
    return trace_id


def _enrich(record: dict[str, Any]) -> None:
    extra = record["extra"]
    if extra.get("trace_id"):
        _trace_id.set(extra["trace_id"])
    else:
        extra["trace_id"] = current_trace_id()

    for key, value in _scope.get().items():
        # explicitly bound values win over the enclosing scope
        if extra.get(key) is None:
            extra[key] = value
    for key in TOP_LEVEL_FIELDS:
        extra.setdefault(key, None)


def _to_json_line(record: dict[str, Any]) -> str:
    extra = record["extra"]
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "trace_id": extra["trace_id"],
        **{key: extra.get(key) for key in TOP_LEVEL_FIELDS},
    }
    context = {key: value for key, value in extra.items() if key not in _RESERVED}
    if context:
        payload["context"] = context
    if record["exception"] is not None:
        payload["exception"] = str(record["exception"])
    return json.dumps(payload, default=_encode_value)


def _encode_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    return str(value)


class JsonLineSink:
    """loguru sink writing one JSON object per line to a stream or an appended file."""

    def __init__(self, target: IO[str] | str | Path) -> None:
        if isinstance(target, (str, Path)):
            path = Path(target)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._path: Path | None = path
            self._stream: IO[str] | None = None
        else:
            self._path = None
            self._stream = target

    def __call__(self, message: Any) -> None:
        line = _to_json_line(message.record) + "\n"
        if self._stream is not None:
            self._stream.write(line)
            self._stream.flush()
            return
        with open(self._path, "a", encoding="utf-8") as file:  # type: ignore[arg-type]
            file.write(line)


def _apply(config: LogConfig) -> None:
    level = config.level.upper()
    handlers: list[dict[str, Any]] = []
    if config.console_output:
        handlers.append({"sink": JsonLineSink(config.console_stream or sys.stderr), "level": level})
    if config.file_output and config.file_path:
        handlers.append({"sink": JsonLineSink(config.file_path), "level": level})
    logger.configure(handlers=handlers, patcher=_enrich, extra=dict(config.extra))


def configure_logging(level: str = "INFO", **kwargs: Any) -> None:
    """Replace all loguru handlers with JSON-line sinks built from ``LogConfig`` fields."""

    _apply(LogConfig(level=level, **kwargs))


class StructuredLogger:
    """Owns a :class:`LogConfig` and applies it to the global loguru logger."""

    def __init__(self, config: LogConfig | None = None) -> None:
        self.config = config or LogConfig()
        self.logger: _LoguruLogger = logger
        _apply(self.config)

    def configure(self, **changes: Any) -> None:
        self.config = self.config.model_copy(update=changes)
        _apply(self.config)

    @contextmanager
    def context(self, *, trace_id: str | None = None, **values: Any) -> Iterator[str]:
        with log_context(trace_id=trace_id, **values) as active:
            yield active


@contextmanager
def log_context(*, trace_id: str | None = None, **values: Any) -> Iterator[str]:
    """Attach ``values`` to every line logged inside the block, under one trace id."""

    scope_token = _scope.set({**_scope.get(), **values})
    active = trace_id or uuid4().hex
    trace_token = _trace_id.set(active)
    try:
        yield active
    finally:
        _trace_id.reset(trace_token)
        _scope.reset(scope_token)


def get_logger(name: str | None = None) -> _LoguruLogger:
    return logger.bind(logger_name=name) if name else logger


def bind(**values: Any) -> _LoguruLogger:
    return logger.bind(**values)


configure_logging()


__all__ = [
    "JsonLineSink",
    "StructuredLogger",
    "bind",
    "configure_logging",
    "current_trace_id",
    "get_logger",
    "log_context",
    "logger",
]
