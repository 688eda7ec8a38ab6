from __future__ import annotations

import argparse
import logging
from typing import Sequence

from .models import GeneratorConfig, Locator, LocatorGroup
from .pom_writer import build_page_object
from .runtime_checks import MISSING_BROWSER_HINT, ensure_supported_python, is_missing_browser_error
from .tool_profiles import TOOL_LANGUAGES
from .translations import SUPPORTED_LOCALES
from .tree_walker import generate_locator_groups, generate_locators, representative_locators
from .validation import validate_generation_config


def _build_logger(verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("smartlocator.cli")
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)
    if verbose:
        engine_logger = logging.getLogger("smartlocator")
        engine_logger.setLevel(logging.DEBUG)
        engine_logger.addHandler(stream_handler)
    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smartlocator",
        description="Generate ranked UI-test locators for an element on a live page.",
    )
    parser.add_argument("--url", required=True, help="Page to open.")
    parser.add_argument("--selector", required=True, help="CSS selector of the element to analyze.")
    parser.add_argument("--tool", required=True, choices=sorted(TOOL_LANGUAGES))
    parser.add_argument("--language", required=True)
    parser.add_argument("--deep-scan", action="store_true", help="Also analyze interactive and text descendants.")
    parser.add_argument("--locale", default="en", choices=sorted(SUPPORTED_LOCALES))
    parser.add_argument("--pom", action="store_true", help="Print a page object instead of the locator list.")
    parser.add_argument("--class-name", default="MyPage")
    parser.add_argument("--verbose", action="store_true")
    return parser


def format_locator(locator: Locator) -> str:
    return f"[{locator.stability:<6}] {locator.method:<11} {locator.value}\n    {locator.code_snippet}"


def format_groups(groups: Sequence[LocatorGroup]) -> str:
    blocks: list[str] = []
    for group in groups:
        lines = [f"== {group.key} =="]
        lines.extend(format_locator(locator) for locator in group.locators)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def run(config: GeneratorConfig, url: str, selector: str, *, pom: bool, class_name: str) -> str:
    from playwright.sync_api import sync_playwright

    from .dom_extractor import extract_from_page

    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=True)
        try:
            page = browser.new_page()
            page.goto(url)
            root = extract_from_page(page, selector)
        finally:
            browser.close()

    if root is None:
        return ""
    if pom:
        groups = generate_locator_groups(root, config)
        return build_page_object(representative_locators(groups), config.tool, config.language, class_name)
    if config.deep_scan:
        return format_groups(generate_locator_groups(root, config))
    return "\n".join(format_locator(locator) for locator in generate_locators(root, config))


def main(argv: Sequence[str] | None = None) -> int:
    ensure_supported_python()
    args = build_parser().parse_args(argv)
    logger = _build_logger(args.verbose)

    check = validate_generation_config(tool=args.tool, language=args.language, ui_locale=args.locale)
    if not check.ok:
        raise SystemExit(check.message)

    config = GeneratorConfig(
        tool=args.tool,
        language=args.language.strip().lower(),
        deep_scan=args.deep_scan,
        ui_locale=args.locale,
    )
    try:
        output = run(config, args.url, args.selector, pom=args.pom, class_name=args.class_name)
    except ModuleNotFoundError as exc:
        if exc.name == "playwright":
            raise SystemExit(
                "playwright is not installed in this interpreter. "
                "Activate the project venv and run `pip install -e .`."
            ) from exc
        raise
    except Exception as exc:
        if is_missing_browser_error(exc):
            raise SystemExit(MISSING_BROWSER_HINT) from exc
        raise

    if not output:
        logger.warning("No element matched selector %s on %s.", args.selector, args.url)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
