from __future__ import annotations

from dataclasses import dataclass

from .models import GeneratorConfig, HeuristicThresholds, DEFAULT_THRESHOLDS
from .tool_profiles import TOOL_LANGUAGES, is_supported_pair, supported_languages
from .translations import SUPPORTED_LOCALES


@dataclass(frozen=True, slots=True)
class ConfigValidation:
    ok: bool
    message: str


def validate_generation_config(
    *,
    tool: str,
    language: str,
    ui_locale: str = "en",
) -> ConfigValidation:
    normalized_tool = (tool or "").strip().lower()
    normalized_language = (language or "").strip().lower()

    if not normalized_tool:
        return ConfigValidation(False, "Tool is required.")
    if normalized_tool not in TOOL_LANGUAGES:
        known = ", ".join(TOOL_LANGUAGES)
        return ConfigValidation(False, f"Unknown tool '{tool}'. Expected one of: {known}.")
    if not normalized_language:
        return ConfigValidation(False, "Programming language is required.")
    if not is_supported_pair(normalized_tool, normalized_language):
        allowed = ", ".join(supported_languages(normalized_tool))
        return ConfigValidation(
            False,
            f"{normalized_tool} does not support {normalized_language}. Allowed languages: {allowed}.",
        )
    locale = (ui_locale or "").strip().lower()
    if locale and locale not in SUPPORTED_LOCALES:
        return ConfigValidation(False, f"Unsupported UI locale '{ui_locale}'.")

    return ConfigValidation(True, "Validation successful.")


def build_generator_config(
    *,
    tool: str,
    language: str,
    deep_scan: bool = False,
    ui_locale: str = "en",
    thresholds: HeuristicThresholds = DEFAULT_THRESHOLDS,
) -> GeneratorConfig:
    """Validate and build a config, raising ``ValueError`` for pairs outside the tool table."""
    check = validate_generation_config(tool=tool, language=language, ui_locale=ui_locale)
    if not check.ok:
        raise ValueError(check.message)
    return GeneratorConfig(
        tool=tool.strip().lower(),  # type: ignore[arg-type]
        language=language.strip().lower(),  # type: ignore[arg-type]
        deep_scan=deep_scan,
        ui_locale=(ui_locale or "en").strip().lower(),
        thresholds=thresholds,
    )
