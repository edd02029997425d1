"""telelog wiring for the tag engine.

Everything that logs goes through this module:

``configure(...)`` -- swap the active telelog config (explicit, preset or env)
``get_logger(name)`` -- cached ``telelog.Logger`` bound to that config
``record_event(name, ...)`` -- one structured ``event::<name>`` line
``span(name, ...)`` -- profiled block with optional component tracking

Settings come from ``TAG_ENGINE_*`` environment variables unless a preset or
explicit config is applied. The default level is WARNING so an interactive
session stays quiet.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TAG_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "tag_engine")

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Plain description of a telelog config; turned into one by ``build_config``."""

    level: str = "WARNING"
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LogSettings":
        env = os.environ if environ is None else environ

        def flag(name: str, default: bool) -> bool:
            raw = env.get(f"{ENV_PREFIX}{name}")
            return default if raw is None else raw.strip().lower() in _TRUTHY

        return cls(
            level=(env.get(f"{ENV_PREFIX}LOG_LEVEL") or "WARNING").upper(),
            console=not flag("DISABLE_CONSOLE", False),
            color=not flag("NO_COLOR", False),
            json=flag("LOG_JSON", False),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE", ""),
            buffered=flag("LOG_BUFFERED", False),
            buffer_size=int(env.get(f"{ENV_PREFIX}LOG_BUFFER_SIZE") or 2048),
        )


PRESETS: Dict[str, LogSettings] = {
    "development": LogSettings(level="DEBUG", color=True),
    "production": LogSettings(
        level="INFO", console=False, log_file="tag_engine.log", buffered=True
    ),
    "quiet": LogSettings(level="ERROR", console=False),
}


def build_config(settings: LogSettings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.color)
    config.with_json_format(settings.json)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    # span() needs logger.profile
    config.with_profiling(True)
    return config


def preset_settings(preset: str) -> LogSettings:
    try:
        settings = PRESETS[preset.lower()]
    except KeyError as exc:
        raise ValueError(
            f"Unknown preset '{preset}'; expected one of {sorted(PRESETS)}"
        ) from exc
    log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if log_file and settings.log_file:
        settings = replace(settings, log_file=log_file)
    return settings


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Adopt ``config``, a named ``preset``, or (with neither) the environment.

    Cached loggers are dropped so the next ``get_logger`` picks up the change.
    """

    global _CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if config is None:
        settings = preset_settings(preset) if preset else LogSettings.from_env()
        config = build_config(settings)
    else:
        config.with_profiling(True)

    _CONFIG = config
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = build_config(LogSettings.from_env())
    logger_name = name or DEFAULT_LOGGER_NAME
    log = _LOGGERS.get(logger_name)
    if log is None:
        log = _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _CONFIG)
    return log


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    with_data = getattr(log, f"{name}_with", None)
    if with_data is not None:
        with_data(message, [(str(k), _text(v)) for k, v in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass(slots=True)
class SpanHandle:
    """Yielded by ``span``; collects metadata reported if the block fails."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata, "reason": reason}
        if self.component:
            payload["component"] = self.component
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``.

    ``component=True`` also tracks it as a component of the same name; a
    string names the component instead. ``metadata`` is added as logger
    context for the duration of the block.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(
        logger=log, name=name, component=component_name, metadata=dict(context)
    )

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "LogSettings",
    "PRESETS",
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "preset_settings",
    "record_event",
    "span",
]
