"""Locator strategy engine: ranked, tool-specific element locators for UI test automation."""

from .code_formatter import render
from .models import ElementNode, GeneratorConfig, HeuristicThresholds, Locator, LocatorGroup
from .pom_writer import build_page_object
from .tree_walker import analyze, generate_locator_groups, generate_locators, representative_locators
from .validation import build_generator_config, validate_generation_config

__version__ = "0.1.0"

__all__ = [
    "ElementNode",
    "GeneratorConfig",
    "HeuristicThresholds",
    "Locator",
    "LocatorGroup",
    "analyze",
    "build_generator_config",
    "build_page_object",
    "generate_locator_groups",
    "generate_locators",
    "render",
    "representative_locators",
    "validate_generation_config",
]
