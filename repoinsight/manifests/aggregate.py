"""Collect parsed manifests and reduce them into dependency totals."""

from __future__ import annotations

from typing import Iterable, List, Mapping

from ..logging import get_logger
from ..models import DependencyInfo, ManifestLocation, ManifestRecord
from .parsers import parse_manifest

logger = get_logger("manifests")


def collect_manifests(
    locations: Iterable[ManifestLocation],
    contents: Mapping[str, str],
) -> List[ManifestRecord]:
    """Parse every located manifest whose text is available, in scan order."""
    records: List[ManifestRecord] = []
    for location in locations:
        content = contents.get(location.path)
        if not content:
            logger.debug("No content available for %s; skipping", location.path)
            continue
        record = parse_manifest(content, location.path, location.ecosystem)
        if record is not None:
            records.append(record)
    return records


def aggregate_dependencies(records: Iterable[ManifestRecord]) -> DependencyInfo:
    manifests = list(records)
    return DependencyInfo(
        manifests=manifests,
        total_dependencies=sum(len(record.production) for record in manifests),
        total_dev_dependencies=sum(len(record.development) for record in manifests),
    )


__all__ = ["aggregate_dependencies", "collect_manifests"]
