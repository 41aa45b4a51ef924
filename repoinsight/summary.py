"""Prose summary assembled from the analysis outputs."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .analyzers.signatures import BACKEND, DATABASE, FRONTEND
from .models import LanguageStats, ProjectInsight

NO_DESCRIPTION = "No description provided by the repository maintainers."


def generate_summary(
    description: Optional[str],
    insight: ProjectInsight,
    total_files: int,
    total_dependencies: int,
    languages: Sequence[LanguageStats],
) -> str:
    """Combine description, stack, structure, languages and health badges."""
    parts: List[str] = [description or NO_DESCRIPTION]

    frontend = [fw.name for fw in insight.frameworks if fw.category == FRONTEND]
    backend = [fw.name for fw in insight.frameworks if fw.category == BACKEND]
    storage = [fw.name for fw in insight.frameworks if fw.category == DATABASE]
    if frontend or backend:
        stack: List[str] = []
        if frontend:
            stack.append(f"{', '.join(frontend)} on the frontend")
        if backend:
            stack.append(f"{', '.join(backend)} on the backend")
        if storage:
            stack.append(f"{', '.join(storage)} for data storage")
        parts.append(f"The project uses {', and '.join(stack)}.")

    parts.append(
        f"It is a {insight.project_type.lower()} with a {insight.structure.lower()} structure, "
        f"comprising {total_files} files and {total_dependencies} dependencies."
    )

    if languages:
        top = [f"{language.name} ({language.percentage:g}%)" for language in languages[:3]]
        parts.append(f"Primary languages: {', '.join(top)}.")

    badges: List[str] = []
    if insight.has_tests:
        badges.append("test suite")
    if insight.has_ci:
        badges.append("CI/CD pipeline")
    if insight.has_docker:
        badges.append("Docker support")
    if insight.has_docs:
        badges.append("documentation")
    if badges:
        parts.append(f"The project includes a {', '.join(badges)}.")

    return " ".join(parts)


__all__ = ["NO_DESCRIPTION", "generate_summary"]
