"""Ecosystem-specific manifest parsers.

Each parser turns the raw text of one manifest into a ``ManifestRecord``
holding ``{name: version}`` maps for production and development
dependencies. Parsers are deliberately forgiving: they extract what they
can and return ``None`` when nothing was found. ``parse_manifest`` wraps
them so that a malformed file never aborts the surrounding analysis.
"""

from __future__ import annotations

import json
import re
import tomllib
import xml.etree.ElementTree as ET
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from ..logging import get_logger
from ..models import ManifestRecord
from .scanner import (
    CARGO,
    COMPOSER,
    GEMFILE,
    GO,
    GRADLE,
    MAVEN,
    NPM,
    NUGET,
    PIP,
    PIPENV,
    POETRY,
)

LATEST = "latest"

logger = get_logger("manifests")

Parser = Callable[[str, str], Optional[ManifestRecord]]


def _record(
    path: str,
    ecosystem: str,
    production: Dict[str, str],
    development: Optional[Dict[str, str]] = None,
) -> Optional[ManifestRecord]:
    development = development or {}
    if not production and not development:
        return None
    return ManifestRecord(
        path=path,
        ecosystem=ecosystem,
        production=production,
        development=development,
    )


def _string_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(name): str(version) for name, version in value.items()}


def _toml_version(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        version = value.get("version")
        if isinstance(version, str):
            return version
    return LATEST


def _toml_table(data: Mapping[str, Any], *keys: str) -> Dict[str, Any]:
    current: Any = data
    for key in keys:
        if not isinstance(current, dict):
            return {}
        current = current.get(key)
    return current if isinstance(current, dict) else {}


def _toml_dependencies(table: Mapping[str, Any], *, skip: Iterable[str] = ()) -> Dict[str, str]:
    excluded = set(skip)
    return {
        name: _toml_version(value)
        for name, value in table.items()
        if name not in excluded
    }


# JSON based


def parse_npm(content: str, path: str) -> Optional[ManifestRecord]:
    data = json.loads(content)
    if not isinstance(data, dict):
        return None
    return _record(
        path,
        NPM,
        _string_map(data.get("dependencies")),
        _string_map(data.get("devDependencies")),
    )


def parse_composer(content: str, path: str) -> Optional[ManifestRecord]:
    data = json.loads(content)
    if not isinstance(data, dict):
        return None
    # The PHP runtime and ext-* extensions are platform requirements, not packages.
    production = {
        name: version
        for name, version in _string_map(data.get("require")).items()
        if name != "php" and not name.startswith("ext-")
    }
    return _record(path, COMPOSER, production, _string_map(data.get("require-dev")))


# XML based


def _xml_root(content: str) -> ET.Element:
    return ET.fromstring(content.lstrip("\ufeff").strip())


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child_text(element: ET.Element, name: str) -> Optional[str]:
    for child in element:
        if _local_name(child.tag) == name:
            text = (child.text or "").strip()
            return text or None
    return None


def parse_maven(content: str, path: str) -> Optional[ManifestRecord]:
    root = _xml_root(content)
    production: Dict[str, str] = {}
    development: Dict[str, str] = {}
    for element in root.iter():
        if _local_name(element.tag) != "dependency":
            continue
        group = _child_text(element, "groupId")
        artifact = _child_text(element, "artifactId")
        if not group or not artifact:
            continue
        name = f"{group}:{artifact}"
        version = _child_text(element, "version") or LATEST
        if _child_text(element, "scope") == "test":
            development[name] = version
        else:
            production[name] = version
    return _record(path, MAVEN, production, development)


def parse_nuget(content: str, path: str) -> Optional[ManifestRecord]:
    root = _xml_root(content)
    production: Dict[str, str] = {}
    for element in root.iter():
        if _local_name(element.tag) != "PackageReference":
            continue
        name = element.get("Include")
        if not name:
            continue
        production[name] = element.get("Version") or _child_text(element, "Version") or LATEST
    return _record(path, NUGET, production)


# Regex and line based

_GRADLE_DEPENDENCY = re.compile(
    r"\b(implementation|api|compileOnly|runtimeOnly|testImplementation|testCompileOnly|testRuntimeOnly)\b"
    r"\s*\(?\s*['\"]([^'\"]+)['\"]"
)


def parse_gradle(content: str, path: str) -> Optional[ManifestRecord]:
    production: Dict[str, str] = {}
    development: Dict[str, str] = {}
    for match in _GRADLE_DEPENDENCY.finditer(content):
        keyword, coordinate = match.groups()
        parts = coordinate.split(":")
        if len(parts) < 2 or not parts[0] or not parts[1]:
            continue
        name = f"{parts[0]}:{parts[1]}"
        version = parts[2] if len(parts) > 2 and parts[2] else LATEST
        target = development if keyword.startswith("test") else production
        target[name] = version
    return _record(path, GRADLE, production, development)


_PIP_REQUIREMENT = re.compile(r"^([A-Za-z0-9_.-]+)\s*(?:\[[^\]]*\])?\s*(?:([<>=!~]+)\s*(.+))?$")


def parse_pip(content: str, path: str) -> Optional[ManifestRecord]:
    production: Dict[str, str] = {}
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "-")):
            continue
        stripped = stripped.split(" #", 1)[0].split(";", 1)[0].strip()
        match = _PIP_REQUIREMENT.match(stripped)
        if match:
            name, _, version = match.groups()
            production[name] = version.strip() if version else LATEST
    return _record(path, PIP, production)


_GO_REQUIRE_BLOCK = re.compile(r"require\s*\(([\s\S]*?)\)")
_GO_REQUIRE_LINE = re.compile(r"^require\s+(\S+)\s+(v\S+)", re.MULTILINE)
_GO_BLOCK_ENTRY = re.compile(r"^(\S+)\s+(v\S+)")


def parse_go(content: str, path: str) -> Optional[ManifestRecord]:
    production: Dict[str, str] = {}
    for block in _GO_REQUIRE_BLOCK.finditer(content):
        for line in block.group(1).splitlines():
            match = _GO_BLOCK_ENTRY.match(line.strip())
            if match:
                production[match.group(1)] = match.group(2)
    for match in _GO_REQUIRE_LINE.finditer(content):
        production[match.group(1)] = match.group(2)
    return _record(path, GO, production)


_GEM_DECLARATION = re.compile(r"""^gem\s+['"]([^'"]+)['"]\s*(?:,\s*['"]([^'"]+)['"])?""")
_GEM_DEV_GROUP = re.compile(r"^group\s+:development\b")


def parse_gemfile(content: str, path: str) -> Optional[ManifestRecord]:
    production: Dict[str, str] = {}
    development: Dict[str, str] = {}
    in_dev_group = False
    for line in content.splitlines():
        stripped = line.strip()
        if _GEM_DEV_GROUP.match(stripped):
            in_dev_group = True
            continue
        if stripped == "end":
            in_dev_group = False
            continue
        match = _GEM_DECLARATION.match(stripped)
        if match:
            target = development if in_dev_group else production
            target[match.group(1)] = match.group(2) or LATEST
    return _record(path, GEMFILE, production, development)


# TOML based


def parse_pipenv(content: str, path: str) -> Optional[ManifestRecord]:
    data = tomllib.loads(content)
    return _record(
        path,
        PIPENV,
        _toml_dependencies(_toml_table(data, "packages")),
        _toml_dependencies(_toml_table(data, "dev-packages")),
    )


_DEV_EXTRAS = ("dev", "test", "tests", "lint", "docs")
_PEP508_NAME = re.compile(r"^\s*([A-Za-z0-9_.-]+)\s*(?:\[[^\]]*\])?\s*(.*)$")


def _pep508_entry(requirement: Any) -> Optional[tuple[str, str]]:
    if not isinstance(requirement, str):
        return None
    match = _PEP508_NAME.match(requirement.split(";", 1)[0])
    if not match:
        return None
    name, constraint = match.groups()
    return name, constraint.strip() or LATEST


def parse_pyproject(content: str, path: str) -> Optional[ManifestRecord]:
    data = tomllib.loads(content)

    production = _toml_dependencies(
        _toml_table(data, "tool", "poetry", "dependencies"), skip=("python",)
    )
    development = _toml_dependencies(_toml_table(data, "tool", "poetry", "dev-dependencies"))
    development.update(
        _toml_dependencies(_toml_table(data, "tool", "poetry", "group", "dev", "dependencies"))
    )

    project = _toml_table(data, "project")
    requirements = project.get("dependencies")
    if isinstance(requirements, list):
        for requirement in requirements:
            entry = _pep508_entry(requirement)
            if entry:
                production.setdefault(*entry)
    extras = _toml_table(project, "optional-dependencies")
    for group in _DEV_EXTRAS:
        group_requirements = extras.get(group)
        if not isinstance(group_requirements, list):
            continue
        for requirement in group_requirements:
            entry = _pep508_entry(requirement)
            if entry:
                development.setdefault(*entry)

    return _record(path, POETRY, production, development)


def parse_cargo(content: str, path: str) -> Optional[ManifestRecord]:
    # tomllib folds [dependencies.serde] sub-tables into the parent table,
    # so they surface here as {"serde": {"version": ...}}.
    data = tomllib.loads(content)
    return _record(
        path,
        CARGO,
        _toml_dependencies(_toml_table(data, "dependencies")),
        _toml_dependencies(_toml_table(data, "dev-dependencies")),
    )


PARSERS: Mapping[str, Parser] = {
    NPM: parse_npm,
    MAVEN: parse_maven,
    GRADLE: parse_gradle,
    PIP: parse_pip,
    PIPENV: parse_pipenv,
    POETRY: parse_pyproject,
    CARGO: parse_cargo,
    GO: parse_go,
    GEMFILE: parse_gemfile,
    COMPOSER: parse_composer,
    NUGET: parse_nuget,
}


def parse_manifest(content: str, path: str, ecosystem: str) -> Optional[ManifestRecord]:
    """Route manifest text to its ecosystem parser.

    Returns ``None`` for unknown ecosystems, manifests without dependencies,
    and manifests that fail to parse.
    """
    parser = PARSERS.get(ecosystem)
    if parser is None:
        logger.debug("No parser registered for ecosystem %s (%s)", ecosystem, path)
        return None
    try:
        return parser(content, path)
    except (ValueError, ET.ParseError, TypeError, AttributeError, RecursionError) as exc:
        # json.JSONDecodeError and tomllib.TOMLDecodeError are ValueErrors; deep nesting
        # overflows the recursive decoders with RecursionError.
        logger.debug("Skipping unparseable %s manifest %s: %s", ecosystem, path, exc)
        return None


__all__ = [
    "LATEST",
    "PARSERS",
    "parse_cargo",
    "parse_composer",
    "parse_gemfile",
    "parse_go",
    "parse_gradle",
    "parse_manifest",
    "parse_maven",
    "parse_npm",
    "parse_nuget",
    "parse_pip",
    "parse_pipenv",
    "parse_pyproject",
]
