from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import replace
from typing import Sequence

from .code_formatter import append_nth, render
from .models import Locator
from .selector_rules import xpath_literal
from .tool_profiles import is_role_aware
from .translations import message

logger = logging.getLogger(__name__)

_NAME = r"[\w-]+"
_ID_PATTERN = re.compile(rf"^#({_NAME})$")
_TAG_ID_PATTERN = re.compile(rf"^(\w+)#({_NAME})$")
_CLASS_PATTERN = re.compile(rf"^\.({_NAME})$")
_TAG_CLASS_PATTERN = re.compile(rf"^(\w+)\.({_NAME})$")
_ATTRIBUTE_PATTERN = re.compile(rf"^\[({_NAME})='([^']*)'\]$")
_TAG_ATTRIBUTE_PATTERN = re.compile(rf"^(\w+)\[({_NAME})='([^']*)'\]$")


def _class_predicate(class_name: str) -> str:
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {class_name} ')"


def css_to_xpath(css_selector: str) -> str | None:
    """Convert the simple CSS forms the generators emit into an equivalent XPath.

    Handles ``#id``, ``tag#id``, ``.class``, ``tag.class``, ``[attr='v']`` and
    ``tag[attr='v']``. Anything else (combinators, several classes, pseudo-classes) returns None.
    """
    selector = css_selector.strip()

    match = _ID_PATTERN.match(selector)
    if match:
        return f"//*[@id={xpath_literal(match.group(1))}]"
    match = _TAG_ID_PATTERN.match(selector)
    if match:
        return f"//{match.group(1)}[@id={xpath_literal(match.group(2))}]"
    match = _CLASS_PATTERN.match(selector)
    if match:
        return f"//*[{_class_predicate(match.group(1))}]"
    match = _TAG_CLASS_PATTERN.match(selector)
    if match:
        return f"//{match.group(1)}[{_class_predicate(match.group(2))}]"
    match = _ATTRIBUTE_PATTERN.match(selector)
    if match:
        return f"//*[@{match.group(1)}={xpath_literal(match.group(2))}]"
    match = _TAG_ATTRIBUTE_PATTERN.match(selector)
    if match:
        return f"//{match.group(1)}[@{match.group(2)}={xpath_literal(match.group(3))}]"
    return None


def _with_index(
    locator: Locator,
    index: int,
    tool: str,
    language: str,
    locale: str,
) -> Locator:
    description = f"{locator.description} {message(locale, 'duplicate', index=index)}"

    if is_role_aware(tool):
        if not locator.code_snippet.endswith(")"):
            return replace(locator, description=description)
        return replace(
            locator,
            value=f"{locator.value} >> nth={index - 1}",
            code_snippet=append_nth(locator.code_snippet, language, index - 1),
            description=description,
        )

    if locator.method == "xpath":
        value = f"({locator.value})[{index}]"
        return replace(
            locator,
            value=value,
            code_snippet=render("xpath", value, tool, language),
            description=description,
        )

    if locator.method == "css":
        xpath = css_to_xpath(locator.value)
        if xpath is not None:
            value = f"({xpath})[{index}]"
            return replace(
                locator,
                method="xpath",
                value=value,
                code_snippet=render("xpath", value, tool, language),
                description=f"{description} {message(locale, 'duplicate_xpath')}",
            )
        value = f"{locator.value}:nth-of-type({index})"
        return replace(
            locator,
            value=value,
            code_snippet=render("css", value, tool, language),
            stability="Low",
            description=f"{description} {message(locale, 'duplicate_nth_of_type')}",
        )

    return replace(
        locator,
        value=f"{locator.value} [Index: {index}]",
        description=f"{description} {message(locale, 'duplicate_manual')}",
    )


def resolve_duplicates(
    locators: Sequence[Locator],
    tool: str,
    language: str,
    locale: str = "en",
) -> list[Locator]:
    """Index-qualify every repeated (method, value) pair after its first occurrence.

    The first occurrence keeps its value; later occurrences get their 1-based position among
    the repeats. Returns new ``Locator`` objects and never mutates the input.
    """
    totals = Counter((locator.method, locator.value) for locator in locators)
    if all(count <= 1 for count in totals.values()):
        return list(locators)

    seen: Counter[tuple[str, str]] = Counter()
    resolved: list[Locator] = []
    rewritten = 0
    for locator in locators:
        key = (locator.method, locator.value)
        if totals[key] <= 1:
            resolved.append(locator)
            continue
        seen[key] += 1
        index = seen[key]
        if index == 1:
            resolved.append(locator)
            continue
        resolved.append(_with_index(locator, index, tool, language, locale))
        rewritten += 1

    logger.debug("Rewrote %s duplicate locator(s) for %s/%s.", rewritten, tool, language)
    return resolved
