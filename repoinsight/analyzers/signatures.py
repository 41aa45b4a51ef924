"""Static framework signature table.

Each signature lists the evidence that points at a framework or tool. The
more indicators match, the higher the detection confidence. Order matters:
it breaks confidence ties in the detector's output.
"""

from __future__ import annotations

from typing import Tuple

from ..models import FrameworkSignature, Indicator

DEPENDENCY = "dependency"
FILE = "file"
DIRECTORY = "directory"

FRONTEND = "frontend"
BACKEND = "backend"
STYLING = "styling"
TESTING = "testing"
BUILD = "build"
DEVOPS = "devops"
DATABASE = "database"
UTILITY = "utility"


def _dep(pattern: str) -> Indicator:
    return Indicator(DEPENDENCY, pattern)


def _file(pattern: str) -> Indicator:
    return Indicator(FILE, pattern)


def _dir(pattern: str) -> Indicator:
    return Indicator(DIRECTORY, pattern)


def _sig(name: str, category: str, *indicators: Indicator) -> FrameworkSignature:
    return FrameworkSignature(name=name, category=category, indicators=tuple(indicators))


FRAMEWORK_SIGNATURES: Tuple[FrameworkSignature, ...] = (
    _sig("React", FRONTEND, _dep("react"), _file("jsx"), _file("tsx")),
    _sig("Next.js", FRONTEND, _dep("next"), _file("next.config"), _dir("app")),
    _sig("Vue", FRONTEND, _dep("vue"), _file(".vue")),
    _sig("Nuxt", FRONTEND, _dep("nuxt"), _file("nuxt.config")),
    _sig("Angular", FRONTEND, _dep("@angular/core"), _file("angular.json")),
    _sig("Svelte", FRONTEND, _dep("svelte"), _file(".svelte")),
    _sig("Express", BACKEND, _dep("express")),
    _sig("Fastify", BACKEND, _dep("fastify")),
    _sig("NestJS", BACKEND, _dep("@nestjs/core")),
    _sig("Spring Boot", BACKEND, _dep("spring-boot")),
    _sig("Django", BACKEND, _dep("django"), _file("manage.py")),
    _sig("Flask", BACKEND, _dep("flask")),
    _sig("FastAPI", BACKEND, _dep("fastapi")),
    _sig("Ruby on Rails", BACKEND, _dep("rails"), _dir("app/controllers")),
    _sig("Laravel", BACKEND, _dep("laravel/framework"), _file("artisan")),
    _sig("Actix Web", BACKEND, _dep("actix-web")),
    _sig("Gin", BACKEND, _dep("github.com/gin-gonic/gin")),
    _sig("TailwindCSS", STYLING, _dep("tailwindcss"), _file("tailwind.config")),
    _sig("Sass/SCSS", STYLING, _dep("sass"), _file(".scss")),
    _sig("Styled Components", STYLING, _dep("styled-components")),
    _sig("Jest", TESTING, _dep("jest"), _file("jest.config")),
    _sig("Vitest", TESTING, _dep("vitest")),
    _sig("Mocha", TESTING, _dep("mocha")),
    _sig("Pytest", TESTING, _dep("pytest")),
    _sig("JUnit", TESTING, _dep("junit")),
    _sig("Cypress", TESTING, _dep("cypress"), _dir("cypress")),
    _sig("Playwright", TESTING, _dep("playwright")),
    _sig("Webpack", BUILD, _dep("webpack"), _file("webpack.config")),
    _sig("Vite", BUILD, _dep("vite"), _file("vite.config")),
    _sig("Rollup", BUILD, _dep("rollup")),
    _sig("esbuild", BUILD, _dep("esbuild")),
    _sig("Turbopack", BUILD, _file("turbo.json")),
    _sig("Docker", DEVOPS, _file("Dockerfile"), _file("docker-compose")),
    _sig("GitHub Actions", DEVOPS, _dir(".github/workflows")),
    _sig("PostgreSQL", DATABASE, _dep("pg"), _dep("psycopg")),
    _sig("MongoDB", DATABASE, _dep("mongoose"), _dep("mongodb")),
    _sig("Prisma", DATABASE, _dep("prisma"), _file("schema.prisma")),
    _sig("TypeORM", DATABASE, _dep("typeorm")),
    _sig("SQLAlchemy", DATABASE, _dep("sqlalchemy")),
    _sig("Redis", DATABASE, _dep("redis"), _dep("ioredis")),
    _sig("TypeScript", UTILITY, _dep("typescript"), _file("tsconfig.json")),
    _sig("ESLint", UTILITY, _dep("eslint"), _file(".eslintrc")),
    _sig("Prettier", UTILITY, _dep("prettier"), _file(".prettierrc")),
)


__all__ = [
    "BACKEND",
    "BUILD",
    "DATABASE",
    "DEPENDENCY",
    "DEVOPS",
    "DIRECTORY",
    "FILE",
    "FRAMEWORK_SIGNATURES",
    "FRONTEND",
    "STYLING",
    "TESTING",
    "UTILITY",
]
