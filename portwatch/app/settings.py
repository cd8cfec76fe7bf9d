from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Mapping, Tuple

from ..domain.ports import UseCaseError
from ..usecases.enumerate_ports import default_port_prefixes
from ..utils.logging import env_requests_debug


def _default_debug_logging() -> bool:
    return env_requests_debug()


@dataclass(frozen=True)
class MonitorSettings:
    """Typed runtime settings that persist via StorageLocal."""

    tick_ms: int = 100
    idle_interval_ms: int = 2000
    active_interval_ms: int = 1000
    port_prefixes: Tuple[str, ...] = field(default_factory=default_port_prefixes)
    notify_on_start: bool = True
    debug_logging: bool = field(default_factory=_default_debug_logging)

    @property
    def idle_ticks(self) -> int:
        return _to_ticks(self.idle_interval_ms, self.tick_ms)

    @property
    def active_ticks(self) -> int:
        return _to_ticks(self.active_interval_ms, self.tick_ms)

    @property
    def tick_s(self) -> float:
        return self.tick_ms / 1000.0

    def validate(self) -> "MonitorSettings":
        if self.tick_ms <= 0:
            raise UseCaseError("SETTINGS_INVALID", "tick_ms must be positive.")
        if self.active_interval_ms <= 0 or self.idle_interval_ms <= 0:
            raise UseCaseError("SETTINGS_INVALID", "Poll intervals must be positive.")
        if self.active_interval_ms > self.idle_interval_ms:
            raise UseCaseError(
                "SETTINGS_INVALID",
                "active_interval_ms must not exceed idle_interval_ms.",
            )
        if not self.port_prefixes:
            raise UseCaseError("SETTINGS_INVALID", "At least one port prefix is required.")
        return self

    def with_overrides(self, **overrides: Any) -> "MonitorSettings":
        """Return a copy with non-``None`` overrides applied and coerced."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        return replace(self, **_coerce_payload(updates)).validate()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MonitorSettings":
        """Build settings from a persisted flat mapping."""
        if not isinstance(payload, Mapping):
            raise UseCaseError("SETTINGS_INVALID", "Settings payload must be a mapping of flat keys.")
        unknown = set(payload.keys()) - set(cls.__dataclass_fields__.keys())
        if unknown:
            raise UseCaseError(
                "SETTINGS_INVALID",
                f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}",
            )
        return cls(**_coerce_payload(payload)).validate()

    def to_dict(self) -> Dict[str, Any]:
        snapshot = asdict(self)
        snapshot["port_prefixes"] = list(self.port_prefixes)
        return snapshot


def _to_ticks(interval_ms: int, tick_ms: int) -> int:
    return max(1, int(round(interval_ms / float(tick_ms))))


def _coerce_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    coerced: Dict[str, Any] = {}
    for key, raw in payload.items():
        if key in {"tick_ms", "idle_interval_ms", "active_interval_ms"}:
            coerced[key] = _coerce_int(key, raw)
        elif key in {"notify_on_start", "debug_logging"}:
            coerced[key] = _coerce_bool(raw)
        elif key == "port_prefixes":
            coerced[key] = _coerce_prefixes(raw)
        else:
            raise UseCaseError("SETTINGS_INVALID", f"Unhandled settings field: {key}")
    return coerced


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _coerce_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise UseCaseError("SETTINGS_INVALID", f"{name} must be an integer.")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str) and value.strip():
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise UseCaseError("SETTINGS_INVALID", f"{name} must be an integer.")


def _coerce_prefixes(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        raise UseCaseError("SETTINGS_INVALID", "port_prefixes must be a list of strings.")
    prefixes = tuple(str(item).strip() for item in items if str(item).strip())
    if not prefixes:
        raise UseCaseError("SETTINGS_INVALID", "At least one port prefix is required.")
    return prefixes


__all__ = ["MonitorSettings"]
