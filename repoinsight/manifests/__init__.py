"""Manifest discovery, parsing and aggregation."""

from __future__ import annotations

from .aggregate import aggregate_dependencies, collect_manifests
from .parsers import PARSERS, parse_manifest
from .scanner import ECOSYSTEMS, ManifestScanner, match_ecosystem

__all__ = [
    "ECOSYSTEMS",
    "ManifestScanner",
    "PARSERS",
    "aggregate_dependencies",
    "collect_manifests",
    "match_ecosystem",
    "parse_manifest",
]
