from __future__ import annotations

from typing import Callable, Sequence

from .code_formatter import escape_double_quoted, escape_single_quoted
from .models import Locator
from .name_suggester import UniqueNameRegistry, variable_name_for

DEFAULT_CLASS_NAME = "MyPage"
INDENT = "    "

Entry = tuple[str, Locator]

_SELENIUM_WRAPPERS: dict[str, tuple[str, str]] = {
    "java": ("driver.findElement(", ");"),
    "csharp": ("driver.FindElement(", ");"),
    "python": ("driver.find_element(", ")"),
    "javascript": ("await driver.findElement(", ");"),
    "ruby": ("driver.find_element(", ")"),
}


def _strip_call(code: str, prefix: str, suffix: str) -> str | None:
    if code.startswith(prefix) and code.endswith(suffix) and len(code) > len(prefix) + len(suffix):
        return code[len(prefix) : len(code) - len(suffix)]
    return None


def _selenium_expression(locator: Locator, language: str) -> str:
    prefix, suffix = _SELENIUM_WRAPPERS[language]
    inner = _strip_call(locator.code_snippet, prefix, suffix)

    if language == "python":
        if inner is None or not inner.startswith("By."):
            inner = f'By.XPATH, "{escape_double_quoted(locator.value)}"'
        return f"({inner})"
    if language == "ruby":
        if inner is None:
            inner = f"xpath: '{escape_single_quoted(locator.value)}'"
        return f"{{ {inner} }}.freeze"
    if inner is None or not inner.startswith("By."):
        xpath_factory = {"java": "By.xpath", "csharp": "By.XPath", "javascript": "By.xpath"}[language]
        inner = f'{xpath_factory}("{escape_double_quoted(locator.value)}")'
    return inner


def _selenium_java(entries: Sequence[Entry], class_name: str) -> list[str]:
    lines = [
        "import org.openqa.selenium.By;",
        "import org.openqa.selenium.WebDriver;",
        "",
        f"public class {class_name} {{",
        f"{INDENT}WebDriver driver;",
        "",
    ]
    for name, locator in entries:
        lines.append(f"{INDENT}By {name} = {_selenium_expression(locator, 'java')};")
    if entries:
        lines.append("")
    lines.extend(
        [
            f"{INDENT}public {class_name}(WebDriver driver) {{",
            f"{INDENT * 2}this.driver = driver;",
            f"{INDENT}}}",
            "}",
        ]
    )
    return lines


def _selenium_csharp(entries: Sequence[Entry], class_name: str) -> list[str]:
    lines = [
        "using OpenQA.Selenium;",
        "",
        f"public class {class_name}",
        "{",
        f"{INDENT}private IWebDriver driver;",
    ]
    for name, locator in entries:
        lines.append(f"{INDENT}private readonly By {name} = {_selenium_expression(locator, 'csharp')};")
    lines.extend(
        [
            "",
            f"{INDENT}public {class_name}(IWebDriver driver)",
            f"{INDENT}{{",
            f"{INDENT * 2}this.driver = driver;",
            f"{INDENT}}}",
            "}",
        ]
    )
    return lines


def _selenium_python(entries: Sequence[Entry], class_name: str) -> list[str]:
    lines = [
        "from selenium.webdriver.common.by import By",
        "",
        "",
        f"class {class_name}:",
    ]
    for name, locator in entries:
        lines.append(f"{INDENT}{name.upper()} = {_selenium_expression(locator, 'python')}")
    if entries:
        lines.append("")
    lines.extend(
        [
            f"{INDENT}def __init__(self, driver):",
            f"{INDENT * 2}self.driver = driver",
        ]
    )
    return lines


def _selenium_javascript(entries: Sequence[Entry], class_name: str) -> list[str]:
    lines = [
        "const { By } = require('selenium-webdriver');",
        "",
        f"class {class_name} {{",
        f"{INDENT}constructor(driver) {{",
        f"{INDENT * 2}this.driver = driver;",
    ]
    for name, locator in entries:
        lines.append(f"{INDENT * 2}this.{name} = {_selenium_expression(locator, 'javascript')};")
    lines.extend(
        [
            f"{INDENT}}}",
            "}",
            "",
            f"module.exports = {class_name};",
        ]
    )
    return lines


def _selenium_ruby(entries: Sequence[Entry], class_name: str) -> list[str]:
    lines = [f"class {class_name}"]
    for name, locator in entries:
        lines.append(f"  {name.upper()} = {_selenium_expression(locator, 'ruby')}")
    if entries:
        lines.append("")
    lines.extend(
        [
            "  def initialize(driver)",
            "    @driver = driver",
            "  end",
            "end",
        ]
    )
    return lines


_SELENIUM_PAGES: dict[str, Callable[[Sequence[Entry], str], list[str]]] = {
    "java": _selenium_java,
    "csharp": _selenium_csharp,
    "python": _selenium_python,
    "javascript": _selenium_javascript,
    "ruby": _selenium_ruby,
}


def _playwright_expression(locator: Locator, language: str, page_ref: str) -> str:
    code = locator.code_snippet
    source_prefix = "Page." if language == "csharp" else "page."
    if code.startswith(source_prefix):
        return f"{page_ref}.{code[len(source_prefix):]}"

    if language in {"javascript", "typescript"}:
        return f"{page_ref}.locator('{escape_single_quoted(locator.value)}')"
    method = "Locator" if language == "csharp" else "locator"
    return f'{page_ref}.{method}("{escape_double_quoted(locator.value)}")'


def _playwright_page(entries: Sequence[Entry], language: str, class_name: str) -> list[str]:
    if language == "typescript":
        lines = [
            "import { Page, Locator } from '@playwright/test';",
            "",
            f"export class {class_name} {{",
            f"{INDENT}readonly page: Page;",
        ]
        lines.extend(f"{INDENT}readonly {name}: Locator;" for name, _ in entries)
        lines.extend(["", f"{INDENT}constructor(page: Page) {{", f"{INDENT * 2}this.page = page;"])
        lines.extend(
            f"{INDENT * 2}this.{name} = {_playwright_expression(locator, language, 'this.page')};"
            for name, locator in entries
        )
        lines.extend([f"{INDENT}}}", "}"])
        return lines

    if language == "javascript":
        lines = [f"export class {class_name} {{", f"{INDENT}constructor(page) {{", f"{INDENT * 2}this.page = page;"]
        lines.extend(
            f"{INDENT * 2}this.{name} = {_playwright_expression(locator, language, 'this.page')};"
            for name, locator in entries
        )
        lines.extend([f"{INDENT}}}", "}"])
        return lines

    if language == "python":
        lines = [
            "from playwright.sync_api import Page",
            "",
            "",
            f"class {class_name}:",
            f"{INDENT}def __init__(self, page: Page):",
            f"{INDENT * 2}self.page = page",
        ]
        lines.extend(
            f"{INDENT * 2}self.{name} = {_playwright_expression(locator, language, 'self.page')}"
            for name, locator in entries
        )
        return lines

    if language == "java":
        lines = [
            "import com.microsoft.playwright.Locator;",
            "import com.microsoft.playwright.Page;",
            "import com.microsoft.playwright.options.AriaRole;",
            "",
            f"public class {class_name} {{",
            f"{INDENT}private final Page page;",
        ]
        lines.extend(f"{INDENT}private final Locator {name};" for name, _ in entries)
        lines.extend(["", f"{INDENT}public {class_name}(Page page) {{", f"{INDENT * 2}this.page = page;"])
        lines.extend(
            f"{INDENT * 2}this.{name} = {_playwright_expression(locator, language, 'page')};"
            for name, locator in entries
        )
        lines.extend([f"{INDENT}}}", "}"])
        return lines

    lines = [
        "using Microsoft.Playwright;",
        "",
        f"public class {class_name}",
        "{",
        f"{INDENT}private readonly IPage _page;",
    ]
    lines.extend(f"{INDENT}public ILocator {name} {{ get; }}" for name, _ in entries)
    lines.extend(["", f"{INDENT}public {class_name}(IPage page)", f"{INDENT}{{", f"{INDENT * 2}_page = page;"])
    lines.extend(
        f"{INDENT * 2}{name} = {_playwright_expression(locator, language, '_page')};" for name, locator in entries
    )
    lines.extend([f"{INDENT}}}", "}"])
    return lines


def _cypress_page(entries: Sequence[Entry], class_name: str) -> list[str]:
    lines = [f"export class {class_name} {{"]
    for position, (name, locator) in enumerate(entries):
        if position:
            lines.append("")
        code = locator.code_snippet
        if not code.startswith("cy."):
            code = f"cy.get('{escape_single_quoted(locator.value)}')"
        lines.extend([f"{INDENT}get {name}() {{", f"{INDENT * 2}return {code};", f"{INDENT}}}"])
    lines.append("}")
    return lines


def _katalon_page(entries: Sequence[Entry], class_name: str) -> list[str]:
    lines = [
        "import com.kms.katalon.core.testobject.ConditionType",
        "import com.kms.katalon.core.testobject.TestObject",
        "",
        f"class {class_name} {{",
    ]
    for name, locator in entries:
        code = locator.code_snippet
        if not code.startswith("new TestObject()"):
            code = (
                'new TestObject().addProperty("xpath", ConditionType.EQUALS, '
                f'"{escape_double_quoted(locator.value)}")'
            )
        lines.append(f"{INDENT}static TestObject {name} = {code}")
    lines.append("}")
    return lines


def _robot_page(entries: Sequence[Entry], class_name: str) -> list[str]:
    lines = ["*** Comments ***", f"{class_name} locators", "", "*** Variables ***"]
    lines.extend(f"${{{name.upper()}}}{INDENT}{locator.code_snippet}" for name, locator in entries)
    return lines


def build_page_object(
    locators: Sequence[Locator],
    tool: str,
    language: str,
    class_name: str = DEFAULT_CLASS_NAME,
) -> str:
    """Render a page-object source unit exposing one named field per locator.

    Variable names come from each locator's element name in the target language's case
    convention; repeated names get a numeric suffix (``loginButton``, ``loginButton2``).
    The output is text only and is not checked against any document.
    """
    registry = UniqueNameRegistry()
    entries: list[Entry] = [
        (registry.claim(variable_name_for(locator.element_name, language)), locator) for locator in locators
    ]

    if tool == "playwright":
        lines = _playwright_page(entries, language, class_name)
    elif tool == "cypress":
        lines = _cypress_page(entries, class_name)
    elif tool == "katalon":
        lines = _katalon_page(entries, class_name)
    elif tool == "robot":
        lines = _robot_page(entries, class_name)
    else:
        builder = _SELENIUM_PAGES.get(language)
        if builder is None:
            raise ValueError(f"No page object layout for {tool}/{language}.")
        lines = builder(entries, class_name)
    return "\n".join(lines) + "\n"
