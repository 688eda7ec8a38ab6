from __future__ import annotations

from .models import ProgrammingLanguage, Tool

TOOL_LANGUAGES: dict[Tool, tuple[ProgrammingLanguage, ...]] = {
    "selenium": ("java", "python", "csharp", "javascript", "ruby"),
    "playwright": ("javascript", "typescript", "python", "java", "csharp"),
    "cypress": ("javascript", "typescript"),
    "appium": ("java", "python", "javascript", "csharp", "ruby"),
    "katalon": ("groovy",),
    "robot": ("robot",),
}

# Tools with first-class accessible-role queries (getByRole / getByLabel / getByPlaceholder).
ROLE_AWARE_TOOLS: frozenset[str] = frozenset({"playwright"})

# Tools whose community conventions favour explicit data-test attributes.
TEST_ID_TOOLS: frozenset[str] = frozenset({"cypress"})


def supported_languages(tool: str) -> tuple[ProgrammingLanguage, ...]:
    return TOOL_LANGUAGES.get(tool, ())  # type: ignore[arg-type]


def is_supported_pair(tool: str, language: str) -> bool:
    return language in supported_languages(tool)


def is_role_aware(tool: str) -> bool:
    return tool in ROLE_AWARE_TOOLS


def prefers_test_ids(tool: str) -> bool:
    return tool in TEST_ID_TOOLS
