from __future__ import annotations

import pytest

from repoinsight.analyzers import FrameworkDetector
from repoinsight.analyzers.frameworks import dependency_names, resolve_version
from repoinsight.analyzers.signatures import DEPENDENCY, FILE, FRAMEWORK_SIGNATURES
from repoinsight.models import FrameworkSignature, Indicator, ManifestRecord

from tests._fixtures.repo_builder import make_tree


def _npm(path: str = "package.json", production=None, development=None) -> ManifestRecord:
    return ManifestRecord(
        path=path,
        ecosystem="npm",
        production=dict(production or {}),
        development=dict(development or {}),
    )


def _by_name(frameworks):
    return {framework.name: framework for framework in frameworks}


def test_dependency_only_match_scores_fraction_of_indicators() -> None:
    manifests = [_npm(production={"react": "18.2.0"}, development={"jest": "29.0.0"})]
    tree = make_tree(["package.json", "src/index.js"])

    detected = _by_name(FrameworkDetector().detect(tree, manifests))

    react = detected["React"]
    assert react.confidence == pytest.approx(1 / 3)
    assert react.detected_from == "dependency: react"
    assert react.version == "18.2.0"
    assert react.category == "frontend"

    jest = detected["Jest"]
    assert jest.confidence == pytest.approx(0.5)
    assert jest.version == "29.0.0"


def test_file_and_directory_indicators_match_by_substring() -> None:
    tree = make_tree(
        [
            "app/controllers/users_controller.rb",
            "src/App.tsx",
            "src/Button.jsx",
        ]
    )

    detected = _by_name(FrameworkDetector().detect(tree, []))

    assert detected["React"].confidence == pytest.approx(2 / 3)
    assert detected["React"].detected_from == "file: jsx"
    assert detected["React"].version is None
    assert detected["Ruby on Rails"].confidence == pytest.approx(0.5)
    assert detected["Ruby on Rails"].detected_from == "directory: app/controllers"


def test_matching_is_case_insensitive() -> None:
    manifests = [_npm(production={"React": "18.0.0"})]
    tree = make_tree(["docker/Dockerfile"])

    detected = _by_name(FrameworkDetector().detect(tree, manifests))

    assert detected["React"].version == "18.0.0"
    assert "Docker" in detected


def test_unmatched_signatures_are_omitted() -> None:
    assert FrameworkDetector().detect(make_tree(["README.md"]), []) == []


def test_results_sorted_by_confidence_with_table_order_for_ties() -> None:
    manifests = [_npm(production={"express": "4.18.0", "fastify": "4.0.0", "react": "18.2.0"})]

    detected = FrameworkDetector().detect(make_tree(["package.json"]), manifests)

    assert [framework.name for framework in detected] == ["Express", "Fastify", "React"]
    confidences = [framework.confidence for framework in detected]
    assert confidences == sorted(confidences, reverse=True)


def test_confidence_never_exceeds_one() -> None:
    manifests = [_npm(production={"pg": "8", "psycopg": "3"})]

    detected = _by_name(FrameworkDetector().detect(make_tree(["package.json"]), manifests))

    assert detected["PostgreSQL"].confidence == 1.0
    assert detected["PostgreSQL"].version == "8"


def test_custom_signature_table() -> None:
    signatures = [
        FrameworkSignature(
            name="Widget",
            category="utility",
            indicators=(Indicator(FILE, "widget.toml"), Indicator(DEPENDENCY, "widget-core")),
        )
    ]
    manifests = [_npm(development={"widget-core": "2.0"})]

    detected = FrameworkDetector(signatures).detect(make_tree(["widget.toml"]), manifests)

    assert len(detected) == 1
    assert detected[0].confidence == 1.0
    # Dependency indicators are preferred as the evidence source.
    assert detected[0].detected_from == "dependency: widget-core"
    assert detected[0].version == "2.0"


def test_resolve_version_prefers_first_manifest_and_production() -> None:
    manifests = [
        _npm("web/package.json", development={"react": "17.0.0"}),
        _npm("package.json", production={"react": "18.2.0"}),
    ]

    assert resolve_version("react", manifests) == "17.0.0"
    assert resolve_version("React", list(reversed(manifests))) == "18.2.0"
    assert resolve_version("vue", manifests) is None

    same_manifest = [_npm(production={"react": "18"}, development={"react": "17"})]
    assert resolve_version("react", same_manifest) == "18"


def test_dependency_names_lowercases_both_sections() -> None:
    manifests = [_npm(production={"Express": "4"}, development={"Jest": "29"})]

    assert dependency_names(manifests) == {"express", "jest"}


def test_signature_table_is_well_formed() -> None:
    names = [signature.name for signature in FRAMEWORK_SIGNATURES]

    assert len(names) == len(set(names))
    assert all(signature.indicators for signature in FRAMEWORK_SIGNATURES)
    assert names[0] == "React"
