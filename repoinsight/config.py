"""Configuration loading for repoinsight (.repoinsight.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".repoinsight.yml"


@dataclass
class GraphConfig:
    """Tuning constants for the architecture graph."""

    hotspot_factor: float = 1.5
    top_languages: int = 3
    max_config_nodes: int = 5
    min_subdirectory_files: int = 2


@dataclass
class RepoInsightConfig:
    """Represents the settings defined in .repoinsight.yml."""

    root: Optional[Path] = None
    graph: GraphConfig = field(default_factory=GraphConfig)
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> RepoInsightConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return RepoInsightConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    graph = GraphConfig()
    analysis_data = _as_dict(data.get("analysis"))
    if analysis_data:
        hotspot_factor = _as_float(analysis_data.get("hotspot_factor"))
        if hotspot_factor is not None and hotspot_factor > 0:
            graph.hotspot_factor = hotspot_factor
        top_languages = _as_int(analysis_data.get("top_languages"))
        if top_languages is not None and top_languages >= 0:
            graph.top_languages = top_languages
        max_config_nodes = _as_int(analysis_data.get("max_config_nodes"))
        if max_config_nodes is not None and max_config_nodes >= 0:
            graph.max_config_nodes = max_config_nodes
        min_files = _as_int(analysis_data.get("min_subdirectory_files"))
        if min_files is not None and min_files >= 0:
            graph.min_subdirectory_files = min_files

    return RepoInsightConfig(
        root=root,
        graph=graph,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


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


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "GraphConfig", "RepoInsightConfig", "load_config"]
