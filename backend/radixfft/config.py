from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from radixfft.typing import SizePolicy, TwiddleMode

ENV_PREFIX = "RADIXFFT__"
_SECTIONS = ("engine", "sizes", "backend", "logging")


@dataclass
class EngineConfig:
    # "recurrence" builds roots by repeated multiplication, "direct" calls cos/sin per root
    twiddle_mode: TwiddleMode = "recurrence"


@dataclass
class SizeConfig:
    # Rounding used when a requested length is not admissible
    policy: SizePolicy = "not_smaller"


@dataclass
class BackendConfig:
    accelerator: str = "auto"
    fft_size: int = 2048


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class AppConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    sizes: SizeConfig = field(default_factory=SizeConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError("Config root must be a mapping")
        return data


def load_config(path_str: str | None) -> AppConfig:
    raw: dict[str, Any] = _read_yaml(Path(path_str)) if path_str else {}

    # Environment overrides (prefix RADIXFFT__SECTION__KEY)
    # Example: RADIXFFT__ENGINE__TWIDDLE_MODE=direct
    for k, v in os_environ_items():
        if not k.startswith(ENV_PREFIX):
            continue
        parts = k[len(ENV_PREFIX) :].split("__")
        if len(parts) != 2:
            continue
        section, key = parts[0].lower(), parts[1].lower()
        if section not in _SECTIONS:
            continue
        raw.setdefault(section, {})
        if isinstance(raw[section], dict):
            raw[section][key] = coerce_env_value(v)

    for section in _SECTIONS:
        value = raw.get(section, {})
        if not isinstance(value, dict):
            raise ValueError(f"Config section '{section}' must be a mapping")

    config = AppConfig(
        engine=EngineConfig(**raw.get("engine", {})),
        sizes=SizeConfig(**raw.get("sizes", {})),
        backend=BackendConfig(**raw.get("backend", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
    )
    _validate(config)
    return config


def _validate(config: AppConfig) -> None:
    from radixfft.dsp.fft.sizes import SIZE_POLICIES
    from radixfft.dsp.fft.twiddle import check_twiddle_mode
    from radixfft.validation import validate_length

    check_twiddle_mode(config.engine.twiddle_mode)
    if config.sizes.policy not in SIZE_POLICIES:
        raise ValueError(f"Unknown size policy {config.sizes.policy!r}")
    ok, reason = validate_length(config.backend.fft_size)
    if not ok:
        raise ValueError(f"backend.fft_size: {reason}")


def coerce_env_value(val: str) -> Any:
    # Basic bool/int coercion for convenience
    lower = val.lower()
    if lower in {"true", "false"}:
        return lower == "true"
    try:
        return int(val)
    except ValueError:
        return val


def os_environ_items() -> list[tuple[str, str]]:
    # Wrapped for testability
    from os import environ

    return [(k, v) for k, v in environ.items()]
