from __future__ import annotations

from repoinsight.models import DetectedFramework, LanguageStats, ProjectInsight
from repoinsight.summary import NO_DESCRIPTION, generate_summary


def _framework(name: str, category: str) -> DetectedFramework:
    return DetectedFramework(name=name, category=category, confidence=1.0, detected_from="dependency: x")


def test_summary_describes_stack_structure_languages_and_badges() -> None:
    insight = ProjectInsight(
        project_type="Full-Stack Application",
        structure="Monorepo",
        frameworks=[
            _framework("React", "frontend"),
            _framework("Express", "backend"),
            _framework("PostgreSQL", "database"),
            _framework("Jest", "testing"),
        ],
        has_tests=True,
        has_ci=True,
        has_docker=True,
    )
    languages = [
        LanguageStats("TypeScript", 10, 8000, 80.0, "#3178c6"),
        LanguageStats("CSS", 2, 1500, 15.0, "#563d7c"),
        LanguageStats("HTML", 1, 400, 4.5, "#e34c26"),
        LanguageStats("Shell", 1, 100, 0.5, "#89e051"),
    ]

    summary = generate_summary("A demo app.", insight, 14, 42, languages)

    assert summary == (
        "A demo app. "
        "The project uses React on the frontend, and Express on the backend, "
        "and PostgreSQL for data storage. "
        "It is a full-stack application with a monorepo structure, "
        "comprising 14 files and 42 dependencies. "
        "Primary languages: TypeScript (80%), CSS (15%), HTML (4.5%). "
        "The project includes a test suite, CI/CD pipeline, Docker support."
    )


def test_summary_falls_back_to_default_description() -> None:
    insight = ProjectInsight(project_type="Project", structure="Single Module")

    summary = generate_summary(None, insight, 0, 0, [])

    assert summary.startswith(NO_DESCRIPTION)
    assert "The project uses" not in summary
    assert "Primary languages" not in summary
    assert "includes" not in summary


def test_summary_skips_storage_without_application_frameworks() -> None:
    insight = ProjectInsight(
        project_type="Project",
        structure="Single Module",
        frameworks=[_framework("Redis", "database")],
        has_docs=True,
    )

    summary = generate_summary("", insight, 3, 1, [])

    assert "Redis" not in summary
    assert summary.endswith("The project includes a documentation.")
