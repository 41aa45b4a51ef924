"""Framework detection, project classification and architecture graph synthesis."""

from __future__ import annotations

from .architecture import ArchitectureGraphBuilder
from .classifier import ProjectClassifier
from .frameworks import FrameworkDetector
from .signatures import FRAMEWORK_SIGNATURES

__all__ = [
    "ArchitectureGraphBuilder",
    "FRAMEWORK_SIGNATURES",
    "FrameworkDetector",
    "ProjectClassifier",
]
