"""Tests for the ecosystem manifest parsers."""

from __future__ import annotations

import json
import textwrap

import pytest

from repoinsight.manifests import parse_manifest
from repoinsight.manifests.parsers import (
    parse_cargo,
    parse_composer,
    parse_gemfile,
    parse_go,
    parse_gradle,
    parse_maven,
    parse_npm,
    parse_nuget,
    parse_pip,
    parse_pipenv,
    parse_pyproject,
)


def _dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip("\n")


def test_npm_splits_dependencies_and_dev_dependencies() -> None:
    content = json.dumps(
        {"dependencies": {"react": "18.2.0"}, "devDependencies": {"jest": "29.0.0"}}
    )
    record = parse_npm(content, "package.json")

    assert record is not None
    assert record.ecosystem == "npm"
    assert record.production == {"react": "18.2.0"}
    assert record.development == {"jest": "29.0.0"}
    assert record.total_count == 2


def test_npm_without_dependencies_yields_nothing() -> None:
    assert parse_npm('{"name": "demo", "version": "1.0.0"}', "package.json") is None


def test_parse_manifest_swallows_malformed_json() -> None:
    assert parse_manifest("{not json", "package.json", "npm") is None
    assert parse_manifest("[1, 2", "composer.json", "composer") is None


def test_parse_manifest_skips_pathologically_nested_documents() -> None:
    nested = "[" * 100000 + "]" * 100000

    assert parse_manifest(nested, "package.json", "npm") is None
    assert parse_manifest(f"x = {nested}\n", "Cargo.toml", "cargo") is None


def test_parse_manifest_unknown_ecosystem_returns_none() -> None:
    assert parse_manifest("anything", "deps.lock", "unknown") is None


def test_maven_reads_scope_and_defaults_version() -> None:
    content = _dedent(
        """
        <project xmlns="http://maven.apache.org/POM/4.0.0">
          <dependencies>
            <dependency>
              <groupId>org.springframework.boot</groupId>
              <artifactId>spring-boot-starter-web</artifactId>
            </dependency>
            <dependency>
              <groupId>junit</groupId>
              <artifactId>junit</artifactId>
              <version>4.13.2</version>
              <scope>test</scope>
            </dependency>
            <dependency>
              <groupId>com.google.guava</groupId>
              <artifactId>guava</artifactId>
              <version>32.0.0-jre</version>
              <scope>compile</scope>
            </dependency>
          </dependencies>
        </project>
        """
    )
    record = parse_maven(content, "pom.xml")

    assert record is not None
    assert record.production == {
        "org.springframework.boot:spring-boot-starter-web": "latest",
        "com.google.guava:guava": "32.0.0-jre",
    }
    assert record.development == {"junit:junit": "4.13.2"}


def test_maven_malformed_xml_is_skipped() -> None:
    assert parse_manifest("<project><dependencies>", "pom.xml", "maven") is None


def test_gradle_test_configurations_are_development() -> None:
    content = _dedent(
        """
        dependencies {
            implementation 'org.springframework.boot:spring-boot-starter:3.1.0'
            api "com.squareup.okhttp3:okhttp:4.11.0"
            runtimeOnly 'org.postgresql:postgresql'
            testImplementation 'junit:junit:4.13'
        }
        """
    )
    record = parse_gradle(content, "build.gradle")

    assert record is not None
    assert record.production == {
        "org.springframework.boot:spring-boot-starter": "3.1.0",
        "com.squareup.okhttp3:okhttp": "4.11.0",
        "org.postgresql:postgresql": "latest",
    }
    assert record.development == {"junit:junit": "4.13"}


def test_gradle_kotlin_dsl_and_project_references() -> None:
    content = _dedent(
        """
        dependencies {
            implementation("io.ktor:ktor-server-core:2.3.0")
            implementation(project(":core"))
            testImplementation(kotlin("test"))
        }
        """
    )
    record = parse_gradle(content, "build.gradle.kts")

    assert record is not None
    assert record.production == {"io.ktor:ktor-server-core": "2.3.0"}
    assert record.development == {}


def test_pip_requirements_lines() -> None:
    content = _dedent(
        """
        # web stack
        fastapi==0.111.0
        requests[security]>=2.31  # http
        uvicorn
        -r base.txt
        --index-url https://example.org/simple
        pywin32>=306; sys_platform == "win32"
        """
    )
    record = parse_pip(content, "requirements.txt")

    assert record is not None
    assert record.production == {
        "fastapi": "0.111.0",
        "requests": "2.31",
        "uvicorn": "latest",
        "pywin32": "306",
    }
    assert record.development == {}


def test_pipenv_sections() -> None:
    content = _dedent(
        """
        [[source]]
        url = "https://pypi.org/simple"
        verify_ssl = true

        [packages]
        django = "==4.2"
        requests = "*"
        celery = {version = ">=5.0", extras = ["redis"]}

        [dev-packages]
        pytest = "*"

        [requires]
        python_version = "3.11"
        """
    )
    record = parse_pipenv(content, "Pipfile")

    assert record is not None
    assert record.production == {"django": "==4.2", "requests": "*", "celery": ">=5.0"}
    assert record.development == {"pytest": "*"}


def test_poetry_excludes_python_and_reads_both_dev_layouts() -> None:
    content = _dedent(
        """
        [tool.poetry]
        name = "demo"

        [tool.poetry.dependencies]
        python = "^3.11"
        fastapi = "^0.110"
        sqlalchemy = {version = "^2.0", extras = ["asyncio"]}

        [tool.poetry.dev-dependencies]
        black = "^24.0"

        [tool.poetry.group.dev.dependencies]
        pytest = "^8.0"
        """
    )
    record = parse_pyproject(content, "pyproject.toml")

    assert record is not None
    assert record.ecosystem == "poetry"
    assert record.production == {"fastapi": "^0.110", "sqlalchemy": "^2.0"}
    assert record.development == {"black": "^24.0", "pytest": "^8.0"}


def test_pyproject_project_table_dependencies() -> None:
    content = _dedent(
        """
        [project]
        name = "demo"
        dependencies = ["httpx>=0.27", "PyYAML"]

        [project.optional-dependencies]
        test = ["pytest>=7.4"]
        gui = ["PySide6"]
        """
    )
    record = parse_pyproject(content, "pyproject.toml")

    assert record is not None
    assert record.production == {"httpx": ">=0.27", "PyYAML": "latest"}
    assert record.development == {"pytest": ">=7.4"}


def test_pyproject_without_dependencies_yields_nothing() -> None:
    content = '[build-system]\nrequires = ["setuptools"]\n'
    assert parse_pyproject(content, "pyproject.toml") is None


def test_cargo_sections_and_sub_tables() -> None:
    content = "[dependencies]\nserde = \"1.0\"\n\n[dev-dependencies]\nmockall = \"0.11\"\n"
    record = parse_cargo(content, "Cargo.toml")

    assert record is not None
    assert record.production == {"serde": "1.0"}
    assert record.development == {"mockall": "0.11"}

    content = _dedent(
        """
        [package]
        name = "demo"
        version = "0.1.0"

        [dependencies]
        tokio = { version = "1", features = ["full"] }

        [dependencies.actix-web]
        version = "4.4"
        default-features = false
        """
    )
    record = parse_cargo(content, "Cargo.toml")

    assert record is not None
    assert record.production == {"tokio": "1", "actix-web": "4.4"}
    assert "version" not in record.production


def test_go_mod_block_and_single_line_requires() -> None:
    content = _dedent(
        """
        module example.com/demo

        go 1.21

        require github.com/pkg/errors v0.9.1

        require (
            github.com/gin-gonic/gin v1.9.1
            golang.org/x/sync v0.5.0 // indirect
        )
        """
    )
    record = parse_go(content, "go.mod")

    assert record is not None
    assert record.production == {
        "github.com/pkg/errors": "v0.9.1",
        "github.com/gin-gonic/gin": "v1.9.1",
        "golang.org/x/sync": "v0.5.0",
    }
    assert record.development == {}


def test_gemfile_development_group() -> None:
    content = _dedent(
        """
        source "https://rubygems.org"

        gem "rails", "~> 7.1"
        gem 'pg'

        group :development, :test do
          gem "rspec-rails", "6.0"
        end

        gem "puma"
        """
    )
    record = parse_gemfile(content, "Gemfile")

    assert record is not None
    assert record.production == {"rails": "~> 7.1", "pg": "latest", "puma": "latest"}
    assert record.development == {"rspec-rails": "6.0"}


def test_composer_strips_platform_requirements() -> None:
    content = json.dumps(
        {
            "require": {"php": "^8.1", "ext-json": "*", "laravel/framework": "^10.0"},
            "require-dev": {"phpunit/phpunit": "^10.0"},
        }
    )
    record = parse_composer(content, "composer.json")

    assert record is not None
    assert record.production == {"laravel/framework": "^10.0"}
    assert record.development == {"phpunit/phpunit": "^10.0"}


def test_composer_with_only_platform_requirements_yields_nothing() -> None:
    content = json.dumps({"require": {"php": "^8.1", "ext-mbstring": "*"}})
    assert parse_composer(content, "composer.json") is None


def test_nuget_package_references() -> None:
    content = _dedent(
        """
        <Project Sdk="Microsoft.NET.Sdk">
          <ItemGroup>
            <PackageReference Include="Newtonsoft.Json" Version="13.0.3" />
            <PackageReference Include="Serilog">
              <Version>3.1.1</Version>
            </PackageReference>
          </ItemGroup>
        </Project>
        """
    )
    record = parse_nuget(content, "src/App/App.csproj")

    assert record is not None
    assert record.production == {"Newtonsoft.Json": "13.0.3", "Serilog": "3.1.1"}
    assert record.development == {}


@pytest.mark.parametrize(
    ("ecosystem", "path", "content"),
    [
        ("npm", "package.json", '{"dependencies": {"a": "1"}, "devDependencies": {"b": "2"}}'),
        ("cargo", "Cargo.toml", '[dependencies]\na = "1"\n[dev-dependencies]\nb = "2"\n'),
        ("gemfile", "Gemfile", 'gem "a"\ngroup :development do\n  gem "b"\nend\n'),
        ("pip", "requirements.txt", "a==1\nb\n"),
    ],
)
def test_total_count_matches_section_sizes(ecosystem: str, path: str, content: str) -> None:
    record = parse_manifest(content, path, ecosystem)

    assert record is not None
    assert record.total_count == len(record.production) + len(record.development)
