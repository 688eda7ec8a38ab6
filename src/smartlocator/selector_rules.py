from __future__ import annotations

import re

FRAMEWORK_VALUE_PREFIXES = ("data-v-", "css-", "ng-", "sc-")
FRAMEWORK_ATTRIBUTE_PREFIXES = ("data-v-", "ng-")
TEST_ID_ATTRIBUTE_PREFIXES = ("data-testid", "data-test", "data-cy", "data-qa")

EXCLUDED_ATTRIBUTES = {"id", "class", "style"}

_UUID_PATTERN = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")
_HEX_RUN_PATTERN = re.compile(r"[0-9a-fA-F]{10,}")
_DIGIT_TAIL_PATTERN = re.compile(r"[-_]?\d{5,}$")
_LEADING_DIGIT_PATTERN = re.compile(r"^\d")
_LETTERS_THEN_DIGITS_PATTERN = re.compile(r"[a-zA-Z]+[-_]?\d{4,}")
_DENSE_CLASS_PATTERN = re.compile(r"[A-Za-z0-9]{15,}")
_CSS_SAFE_ID_PATTERN = re.compile(r"^-?[A-Za-z_][A-Za-z0-9_-]*$")


def is_dynamic_value(value: str | None, *, class_token: bool = False) -> bool:
    """Return True when an id, class or attribute value looks machine-generated.

    The rule set is tuned for scoped-style hashes, framework directives, UUIDs and numeric
    suffixes. ``class_token`` enables the extra check for long unseparated class names that
    CSS-in-JS tooling produces.
    """
    if not value:
        return False

    if value.startswith(FRAMEWORK_VALUE_PREFIXES):
        return True
    if _UUID_PATTERN.search(value):
        return True
    if _HEX_RUN_PATTERN.search(value):
        return True
    if _DIGIT_TAIL_PATTERN.search(value):
        return True
    if _LEADING_DIGIT_PATTERN.match(value):
        return True
    if _LETTERS_THEN_DIGITS_PATTERN.search(value):
        return True
    if class_token and _DENSE_CLASS_PATTERN.fullmatch(value):
        return True
    return False


def is_dynamic_class_token(token: str) -> bool:
    return is_dynamic_value(token, class_token=True)


def stable_classes(classes: list[str]) -> list[str]:
    return [token for token in classes if token and not is_dynamic_class_token(token)]


def is_framework_attribute(name: str) -> bool:
    return name.startswith(FRAMEWORK_ATTRIBUTE_PREFIXES)


def is_test_id_attribute(name: str) -> bool:
    return name.startswith(TEST_ID_ATTRIBUTE_PREFIXES)


def mentions_test_id_attribute(locator_value: str) -> bool:
    return any(prefix in locator_value for prefix in TEST_ID_ATTRIBUTE_PREFIXES)


def is_event_attribute(name: str) -> bool:
    lowered = name.lower()
    return (
        lowered.startswith("on")
        or lowered in {"ng-click", "@click", "v-on:click"}
        or lowered.startswith("hx-")
    )


def normalize_space(value: str | None, limit: int | None = None) -> str:
    if not value:
        return ""
    compact = re.sub(r"\s+", " ", str(value)).strip()
    return compact[:limit] if limit is not None else compact


def xpath_literal(value: str) -> str:
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    pieces = value.split("'")
    quoted = [f"'{piece}'" for piece in pieces]
    return "concat(" + ", \"'\", ".join(quoted) + ")"


def css_attribute_literal(value: str, quote: str = "'") -> str:
    """Quote a CSS attribute value, switching to the other quote when ``value`` contains ``quote``."""
    if quote not in value:
        return f"{quote}{value}{quote}"
    other = '"' if quote == "'" else "'"
    return other + value.replace("\\", "\\\\").replace(other, f"\\{other}") + other


def is_css_safe_id(value: str) -> bool:
    return bool(_CSS_SAFE_ID_PATTERN.match(value))


def css_id_selector(id_value: str, tag: str = "", quote: str = "'") -> str:
    """Return ``tag#id`` when the id is a plain CSS identifier, else ``tag[id='...']``."""
    if is_css_safe_id(id_value):
        return f"{tag}#{id_value}"
    return f"{tag}[id={css_attribute_literal(id_value, quote)}]"


def css_name_selector(name: str, quote: str = "'") -> str:
    return f"[name={css_attribute_literal(name, quote)}]"
