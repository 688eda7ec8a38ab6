from __future__ import annotations

import logging
from typing import Callable, Mapping

from .selector_rules import css_id_selector, css_name_selector
from .tool_profiles import TOOL_LANGUAGES

logger = logging.getLogger(__name__)

Formatter = Callable[[str, Mapping[str, str]], str]


def escape_double_quoted(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def escape_single_quoted(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _keep(value: str) -> str:
    return value


def _template(template: str, escape: Callable[[str], str]) -> Formatter:
    def _format(value: str, _extra: Mapping[str, str]) -> str:
        return template.replace("{value}", escape(value))

    return _format


def _selector(template: str, escape: Callable[[str], str], build: Callable[[str, str], str]) -> Formatter:
    """Build a CSS selector from the raw value, then embed it in a string-literal template."""
    # Quote the selector with the character the host literal does not use.
    quote = '"' if escape is escape_single_quoted else "'"

    def _format(value: str, _extra: Mapping[str, str]) -> str:
        return template.replace("{value}", escape(build(value, quote)))

    return _format


def _id_selector(value: str, quote: str) -> str:
    return css_id_selector(value, quote=quote)


_SELENIUM_TEMPLATES: dict[str, tuple[Callable[[str], str], dict[str, str]]] = {
    "java": (
        escape_double_quoted,
        {
            "id": 'driver.findElement(By.id("{value}"));',
            "name": 'driver.findElement(By.name("{value}"));',
            "linkText": 'driver.findElement(By.linkText("{value}"));',
            "css": 'driver.findElement(By.cssSelector("{value}"));',
            "xpath": 'driver.findElement(By.xpath("{value}"));',
        },
    ),
    "python": (
        escape_double_quoted,
        {
            "id": 'driver.find_element(By.ID, "{value}")',
            "name": 'driver.find_element(By.NAME, "{value}")',
            "linkText": 'driver.find_element(By.LINK_TEXT, "{value}")',
            "css": 'driver.find_element(By.CSS_SELECTOR, "{value}")',
            "xpath": 'driver.find_element(By.XPATH, "{value}")',
        },
    ),
    "csharp": (
        escape_double_quoted,
        {
            "id": 'driver.FindElement(By.Id("{value}"));',
            "name": 'driver.FindElement(By.Name("{value}"));',
            "linkText": 'driver.FindElement(By.LinkText("{value}"));',
            "css": 'driver.FindElement(By.CssSelector("{value}"));',
            "xpath": 'driver.FindElement(By.XPath("{value}"));',
        },
    ),
    "javascript": (
        escape_double_quoted,
        {
            "id": 'await driver.findElement(By.id("{value}"));',
            "name": 'await driver.findElement(By.name("{value}"));',
            "linkText": 'await driver.findElement(By.linkText("{value}"));',
            "css": 'await driver.findElement(By.css("{value}"));',
            "xpath": 'await driver.findElement(By.xpath("{value}"));',
        },
    ),
    "ruby": (
        escape_single_quoted,
        {
            "id": "driver.find_element(id: '{value}')",
            "name": "driver.find_element(name: '{value}')",
            "linkText": "driver.find_element(link_text: '{value}')",
            "css": "driver.find_element(css: '{value}')",
            "xpath": "driver.find_element(xpath: '{value}')",
        },
    ),
}

_PLAYWRIGHT_TEMPLATES: dict[str, tuple[Callable[[str], str], dict[str, str]]] = {
    "javascript": (
        escape_single_quoted,
        {
            "css": "page.locator('{value}')",
            "xpath": "page.locator('xpath={value}')",
            "label": "page.getByLabel('{value}')",
            "placeholder": "page.getByPlaceholder('{value}')",
            "text": "page.getByText('{value}', { exact: true })",
            "linkText": "page.getByText('{value}', { exact: true })",
        },
    ),
    "python": (
        escape_double_quoted,
        {
            "css": 'page.locator("{value}")',
            "xpath": 'page.locator("xpath={value}")',
            "label": 'page.get_by_label("{value}")',
            "placeholder": 'page.get_by_placeholder("{value}")',
            "text": 'page.get_by_text("{value}", exact=True)',
            "linkText": 'page.get_by_text("{value}", exact=True)',
        },
    ),
    "java": (
        escape_double_quoted,
        {
            "css": 'page.locator("{value}")',
            "xpath": 'page.locator("xpath={value}")',
            "label": 'page.getByLabel("{value}")',
            "placeholder": 'page.getByPlaceholder("{value}")',
            "text": 'page.getByText("{value}", new Page.GetByTextOptions().setExact(true))',
            "linkText": 'page.getByText("{value}", new Page.GetByTextOptions().setExact(true))',
        },
    ),
    "csharp": (
        escape_double_quoted,
        {
            "css": 'Page.Locator("{value}")',
            "xpath": 'Page.Locator("xpath={value}")',
            "label": 'Page.GetByLabel("{value}")',
            "placeholder": 'Page.GetByPlaceholder("{value}")',
            "text": 'Page.GetByText("{value}", new() { Exact = true })',
            "linkText": 'Page.GetByText("{value}", new() { Exact = true })',
        },
    ),
}
_PLAYWRIGHT_TEMPLATES["typescript"] = _PLAYWRIGHT_TEMPLATES["javascript"]

_CYPRESS_TEMPLATES: dict[str, str] = {
    "linkText": "cy.contains('{value}')",
    "css": "cy.get('{value}')",
    "xpath": "cy.xpath('{value}')",
}

_KATALON_PROPERTIES: dict[str, str] = {
    "id": "id",
    "name": "name",
    "linkText": "text",
    "css": "css",
    "xpath": "xpath",
}

_ROBOT_PREFIXES: dict[str, str] = {
    "id": "id",
    "name": "name",
    "linkText": "link",
    "css": "css",
    "xpath": "xpath",
}


def _playwright_role(language: str) -> Formatter:
    def _format(value: str, extra: Mapping[str, str]) -> str:
        role = (extra.get("role") or "").strip()
        if not role:
            return value
        name = extra.get("name") or ""
        if language in {"javascript", "typescript"}:
            options = f", {{ name: '{escape_single_quoted(name)}' }}" if name else ""
            return f"page.getByRole('{role}'{options})"
        if language == "python":
            options = f', name="{escape_double_quoted(name)}"' if name else ""
            return f'page.get_by_role("{role}"{options})'
        if language == "java":
            options = f', new Page.GetByRoleOptions().setName("{escape_double_quoted(name)}")' if name else ""
            return f"page.getByRole(AriaRole.{role.upper()}{options})"
        options = f', new() {{ Name = "{escape_double_quoted(name)}" }}' if name else ""
        return f"Page.GetByRole(AriaRole.{role.capitalize()}{options})"

    return _format


def _build_formatter_table() -> dict[tuple[str, str, str], Formatter]:
    table: dict[tuple[str, str, str], Formatter] = {}

    for tool in ("selenium", "appium"):
        for language in TOOL_LANGUAGES[tool]:
            escape, templates = _SELENIUM_TEMPLATES[language]
            for method, template in templates.items():
                table[(tool, method, language)] = _template(template, escape)

    for language in TOOL_LANGUAGES["playwright"]:
        escape, templates = _PLAYWRIGHT_TEMPLATES[language]
        for method, template in templates.items():
            table[("playwright", method, language)] = _template(template, escape)
        table[("playwright", "id", language)] = _selector(templates["css"], escape, _id_selector)
        table[("playwright", "name", language)] = _selector(templates["css"], escape, css_name_selector)
        table[("playwright", "role", language)] = _playwright_role(language)

    for language in TOOL_LANGUAGES["cypress"]:
        for method, template in _CYPRESS_TEMPLATES.items():
            table[("cypress", method, language)] = _template(template, escape_single_quoted)
        css_template = _CYPRESS_TEMPLATES["css"]
        table[("cypress", "id", language)] = _selector(css_template, escape_single_quoted, _id_selector)
        table[("cypress", "name", language)] = _selector(css_template, escape_single_quoted, css_name_selector)

    for method, prop in _KATALON_PROPERTIES.items():
        template = f'new TestObject().addProperty("{prop}", ConditionType.EQUALS, "{{value}}")'
        table[("katalon", method, "groovy")] = _template(template, escape_double_quoted)

    for method, prefix in _ROBOT_PREFIXES.items():
        table[("robot", method, "robot")] = _template(f"{prefix}={{value}}", _keep)

    return table


FORMATTERS: dict[tuple[str, str, str], Formatter] = _build_formatter_table()


def can_render(tool: str, method: str, language: str) -> bool:
    return (tool, method, language) in FORMATTERS


def render(
    method: str,
    value: str,
    tool: str,
    language: str,
    extra: Mapping[str, str] | None = None,
) -> str:
    formatter = FORMATTERS.get((tool, method, language))
    if formatter is None:
        logger.debug("No formatter for (%s, %s, %s); returning raw value.", tool, method, language)
        return value
    return formatter(value, extra or {})


def append_nth(code: str, language: str, index: int) -> str:
    """Chain a zero-based nth() qualifier onto a rendered Playwright locator."""
    method = "Nth" if language == "csharp" else "nth"
    return f"{code}.{method}({index})"
