"""Extension to language tables used for statistics and graph tagging."""

from __future__ import annotations

from typing import Dict, Optional

LANGUAGE_BY_EXTENSION: Dict[str, str] = {
    "ts": "TypeScript",
    "tsx": "TypeScript",
    "js": "JavaScript",
    "jsx": "JavaScript",
    "mjs": "JavaScript",
    "cjs": "JavaScript",
    "py": "Python",
    "pyw": "Python",
    "java": "Java",
    "kt": "Kotlin",
    "kts": "Kotlin",
    "rs": "Rust",
    "go": "Go",
    "rb": "Ruby",
    "erb": "Ruby",
    "php": "PHP",
    "cs": "C#",
    "fs": "F#",
    "c": "C",
    "h": "C",
    "cpp": "C++",
    "cc": "C++",
    "cxx": "C++",
    "hpp": "C++",
    "swift": "Swift",
    "dart": "Dart",
    "scala": "Scala",
    "lua": "Lua",
    "r": "R",
    "sql": "SQL",
    "html": "HTML",
    "htm": "HTML",
    "css": "CSS",
    "scss": "SCSS",
    "sass": "SCSS",
    "less": "Less",
    "vue": "Vue",
    "svelte": "Svelte",
    "json": "JSON",
    "yaml": "YAML",
    "yml": "YAML",
    "xml": "XML",
    "md": "Markdown",
    "mdx": "MDX",
    "sh": "Shell",
    "bash": "Shell",
    "zsh": "Shell",
    "ps1": "PowerShell",
    "toml": "TOML",
    "graphql": "GraphQL",
    "gql": "GraphQL",
    "proto": "Protocol Buffers",
    "tf": "Terraform",
    "hcl": "HCL",
    "ex": "Elixir",
    "exs": "Elixir",
    "erl": "Erlang",
    "hs": "Haskell",
    "clj": "Clojure",
    "cljs": "ClojureScript",
    "sol": "Solidity",
}

# Narrower table for graph nodes: source languages only, no data or docs formats.
SOURCE_LANGUAGE_BY_EXTENSION: Dict[str, str] = {
    "ts": "TypeScript",
    "tsx": "TypeScript",
    "js": "JavaScript",
    "jsx": "JavaScript",
    "py": "Python",
    "java": "Java",
    "kt": "Kotlin",
    "rs": "Rust",
    "go": "Go",
    "rb": "Ruby",
    "php": "PHP",
    "cs": "C#",
    "cpp": "C++",
    "c": "C",
    "swift": "Swift",
    "vue": "Vue",
    "svelte": "Svelte",
    "html": "HTML",
    "css": "CSS",
    "scss": "SCSS",
}

LANGUAGE_COLORS: Dict[str, str] = {
    "TypeScript": "#3178c6",
    "JavaScript": "#f1e05a",
    "Python": "#3572a5",
    "Java": "#b07219",
    "Kotlin": "#a97bff",
    "Rust": "#dea584",
    "Go": "#00add8",
    "Ruby": "#701516",
    "PHP": "#4f5d95",
    "C#": "#178600",
    "F#": "#b845fc",
    "C": "#555555",
    "C++": "#f34b7d",
    "Swift": "#f05138",
    "Dart": "#00b4ab",
    "Scala": "#c22d40",
    "HTML": "#e34c26",
    "CSS": "#563d7c",
    "SCSS": "#c6538c",
    "Vue": "#41b883",
    "Svelte": "#ff3e00",
    "Shell": "#89e051",
    "PowerShell": "#012456",
    "Markdown": "#083fa1",
    "JSON": "#a3a3a3",
    "YAML": "#cb171e",
    "SQL": "#e38c00",
    "GraphQL": "#e10098",
    "Elixir": "#6e4a7e",
    "Haskell": "#5e5086",
    "Lua": "#000080",
    "R": "#198ce7",
}

DEFAULT_COLOR = "#888888"


def file_extension(path: str) -> Optional[str]:
    """Return the lower-cased extension of the path's basename, if any."""
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return None
    return name.rsplit(".", 1)[-1].lower()


def language_for(path: str, table: Dict[str, str] = LANGUAGE_BY_EXTENSION) -> Optional[str]:
    extension = file_extension(path)
    if extension is None:
        return None
    return table.get(extension)


__all__ = [
    "DEFAULT_COLOR",
    "LANGUAGE_BY_EXTENSION",
    "LANGUAGE_COLORS",
    "SOURCE_LANGUAGE_BY_EXTENSION",
    "file_extension",
    "language_for",
]
