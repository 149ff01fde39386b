"""Configuration loading for gitgrade (.gitgrade.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .analyzers.registries import (
    DEFAULT_MANIFESTS,
    DEFAULT_README_CANDIDATES,
    DEFAULT_SOURCE_EXTENSIONS,
)

CONFIG_FILENAME = ".gitgrade.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class AnalysisConfig:
    """Engine tables and walk settings."""

    exclude_dirs: List[str] = field(default_factory=list)
    workers: int = 1
    source_extensions: List[str] = field(default_factory=lambda: sorted(DEFAULT_SOURCE_EXTENSIONS))
    readme_candidates: List[str] = field(default_factory=lambda: list(DEFAULT_README_CANDIDATES))
    manifests: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MANIFESTS))
    include_history: bool = True


@dataclass
class LLMConfig:
    """Settings for the AI roadmap summarizer."""

    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    request_timeout: Optional[float] = None


@dataclass
class ServiceConfig:
    host: str = "0.0.0.0"
    port: int = 18080


@dataclass
class GitGradeConfig:
    """High-level settings defined in .gitgrade.yml."""

    path: Optional[Path] = None
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    llm: Optional[LLMConfig] = None
    service: ServiceConfig = field(default_factory=ServiceConfig)


def load_config(config_path: Path | str | None) -> GitGradeConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    if config_path is None:
        return GitGradeConfig()

    config_file = _resolve_config_path(Path(config_path))
    if not config_file.exists():
        return GitGradeConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    analysis = AnalysisConfig()
    analysis_data = _as_dict(data.get("analysis"))
    if analysis_data:
        if "exclude_dirs" in analysis_data:
            analysis.exclude_dirs = _as_str_list(analysis_data.get("exclude_dirs"))
        workers = _as_int(analysis_data.get("workers"))
        if workers is not None:
            analysis.workers = max(1, workers)
        extensions = _as_str_list(analysis_data.get("source_extensions"))
        if extensions:
            analysis.source_extensions = [_normalise_extension(ext) for ext in extensions]
        candidates = _as_str_list(analysis_data.get("readme_candidates"))
        if candidates:
            analysis.readme_candidates = candidates
        manifests = _as_str_mapping(analysis_data.get("manifests"))
        if manifests:
            analysis.manifests = manifests
        include_history = _as_bool(analysis_data.get("include_history"))
        if include_history is not None:
            analysis.include_history = include_history

    llm_data = _as_dict(data.get("llm"))
    llm = None
    if llm_data:
        llm = LLMConfig(
            model=_as_str(llm_data.get("model")),
            base_url=_as_str(llm_data.get("base_url")),
            api_key=_as_str(llm_data.get("api_key")),
            temperature=_as_float(llm_data.get("temperature")),
            max_tokens=_as_int(llm_data.get("max_tokens")),
            request_timeout=_as_float(llm_data.get("request_timeout")),
        )

    service = ServiceConfig()
    service_data = _as_dict(data.get("service"))
    if service_data:
        host = _as_str(service_data.get("host"))
        if host:
            service.host = host
        port = _as_int(service_data.get("port"))
        if port is not None:
            service.port = port

    return GitGradeConfig(path=config_file, analysis=analysis, llm=llm, service=service)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _normalise_extension(value: str) -> str:
    value = value.strip()
    return value if value.startswith(".") else f".{value}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


def _as_str_mapping(value: Any) -> Dict[str, str]:
    if not isinstance(value, Mapping):
        return {}
    return {
        str(key): str(item)
        for key, item in value.items()
        if isinstance(item, str) and item.strip()
    }


__all__ = [
    "AnalysisConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "GitGradeConfig",
    "LLMConfig",
    "ServiceConfig",
    "load_config",
]
