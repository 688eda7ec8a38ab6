from __future__ import annotations

import re
import unicodedata

from .models import DEFAULT_THRESHOLDS, ElementNode
from .selector_rules import is_dynamic_value

_HEADING_TAG = re.compile(r"^h[1-6]$")
_SNAKE_TOKEN = re.compile(r"[A-Z]{2,}(?=[A-Z][a-z]+[0-9]*|\b)|[A-Z]?[a-z]+[0-9]*|[A-Z]|[0-9]+")
_FALLBACK_VARIABLE = "element"


def suggest_element_name(node: ElementNode, text_limit: int = DEFAULT_THRESHOLDS.element_name_text_max) -> str:
    prefix = _prefix_for_node(node)
    suffix = _suffix_for_node(node, text_limit)
    return f"{prefix} {suffix}" if suffix else prefix


def _prefix_for_node(node: ElementNode) -> str:
    tag = node.tag
    input_type = node.attr("type")
    role = node.attr("role")

    prefix = tag.upper()
    if tag == "input" and input_type:
        prefix = f"{input_type.upper()} Input"
    if role == "button" or tag == "button":
        prefix = "Button"
    if tag == "a":
        prefix = "Link"
    if tag in {"span", "div"}:
        prefix = "Element"
    if tag == "label":
        prefix = "Label"
    if tag == "p":
        prefix = "Text"
    if _HEADING_TAG.match(tag):
        prefix = "Heading"
    if tag == "img":
        prefix = "Image"
    if tag == "svg":
        prefix = "Icon"
    return prefix


def _suffix_for_node(node: ElementNode, text_limit: int) -> str:
    placeholder = node.attr("placeholder")
    text = node.text.strip()[:text_limit]
    aria_label = node.attr("aria-label")
    name = node.attr("name")
    id_value = node.id

    if placeholder:
        return f'"{placeholder}"'
    if text:
        return f'"{text}"'
    if aria_label:
        return f'"{aria_label}"'
    if name:
        return f"(name={name})"
    if id_value and not is_dynamic_value(id_value):
        return f"(#{id_value})"
    return ""


def clean_identifier_source(value: str | None) -> str:
    folded = _fold_ascii(value or "")
    return re.sub(r"[^a-zA-Z0-9\s]", "", folded).strip()


def to_camel_case(value: str) -> str:
    lowered = value.lower()
    joined = re.sub(r"[^a-zA-Z0-9]+(.)", lambda match: match.group(1).upper(), lowered)
    return re.sub(r"[^a-zA-Z0-9]", "", joined)


def to_pascal_case(value: str) -> str:
    camel = to_camel_case(value)
    return camel[:1].upper() + camel[1:]


def to_snake_case(value: str) -> str:
    tokens = _SNAKE_TOKEN.findall(value)
    if tokens:
        return "_".join(token.lower() for token in tokens)
    return re.sub(r"\s+", "_", value.lower())


def variable_name_for(element_name: str | None, language: str) -> str:
    source = clean_identifier_source(element_name) or _FALLBACK_VARIABLE
    if language in {"python", "ruby", "robot"}:
        name = to_snake_case(source)
    elif language == "csharp":
        name = to_pascal_case(source)
    else:
        name = to_camel_case(source)

    if not name:
        name = _FALLBACK_VARIABLE
    if name[0].isdigit():
        name = f"e_{name}" if language in {"python", "ruby", "robot"} else f"e{name}"
    return name


class UniqueNameRegistry:
    """Hands out collision-free names: ``login``, ``login2``, ``login3`` ..."""

    def __init__(self) -> None:
        self._used: set[str] = set()

    def claim(self, base_name: str) -> str:
        candidate = base_name
        counter = 2
        while candidate in self._used:
            candidate = f"{base_name}{counter}"
            counter += 1
        self._used.add(candidate)
        return candidate


def _fold_ascii(value: str) -> str:
    value = value.replace("đ", "d").replace("Đ", "D").replace("ı", "i")
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(char for char in decomposed if not unicodedata.combining(char))
