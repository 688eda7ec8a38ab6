from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from .code_formatter import can_render, render
from .models import ElementNode, GeneratorConfig, Locator, LocatorMethod, PriorityLevel, Stability
from .name_suggester import suggest_element_name
from .scoring import rank_locators
from .selector_rules import (
    EXCLUDED_ATTRIBUTES,
    css_attribute_literal,
    css_id_selector,
    css_name_selector,
    is_dynamic_value,
    is_framework_attribute,
    is_test_id_attribute,
    normalize_space,
    stable_classes,
    xpath_literal,
)
from .tool_profiles import is_role_aware
from .translations import message

TEXT_EXCLUDED_TAGS = {"script", "style", "select", "svg"}

RECOGNIZED_ROLES = {
    "button",
    "checkbox",
    "heading",
    "img",
    "link",
    "radio",
    "textbox",
    "combobox",
    "option",
    "menuitem",
    "tab",
}
NAMELESS_ROLES = {"textbox", "checkbox"}
TEXTBOX_INPUT_TYPES = {"", "text", "search", "email", "url", "tel"}
BUTTON_INPUT_TYPES = {"submit", "button", "reset"}
CLICK_HANDLER_ATTRIBUTES = ("onclick", "ng-click", "@click")

_ATTRIBUTE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")
_HEADING_TAG = re.compile(r"^h[1-6]$")


def normalize_classes(raw: Sequence[str] | str | None) -> list[str]:
    if not raw:
        return []
    items = raw.split() if isinstance(raw, str) else [item for item in raw if isinstance(item, str)]

    seen: set[str] = set()
    normalized: list[str] = []
    for item in items:
        clean = item.strip()
        if not clean or clean in seen:
            continue
        seen.add(clean)
        normalized.append(clean)
    return normalized


def infer_role(node: ElementNode) -> str:
    tag = node.tag
    input_type = (node.attr("type") or "").strip().lower()
    role = (node.attr("role") or tag).strip().lower()

    if tag == "button" or (tag == "input" and input_type in BUTTON_INPUT_TYPES):
        role = "button"
    if tag == "a" and node.has_attr("href"):
        role = "link"
    if tag == "input" and input_type in TEXTBOX_INPUT_TYPES:
        role = "textbox"
    if tag == "input" and input_type in {"checkbox", "radio"}:
        role = input_type
    if tag == "textarea":
        role = "textbox"
    if tag == "select":
        role = "combobox"
    if _HEADING_TAG.match(tag):
        role = "heading"
    if any(node.has_attr(attr) for attr in CLICK_HANDLER_ATTRIBUTES):
        role = "button"
    return role


def find_label_for(container: ElementNode, id_value: str) -> ElementNode | None:
    candidates = [container, *container.iter_descendants()]
    for candidate in candidates:
        if candidate.tag == "label" and candidate.attributes.get("for") == id_value:
            return candidate
    return None


@dataclass(slots=True)
class NodeAnalyzer:
    node: ElementNode
    container: ElementNode
    raw_text: str = field(init=False)
    trimmed_text: str = field(init=False)

    def __post_init__(self) -> None:
        self.raw_text = self.node.text or ""
        self.trimmed_text = self.raw_text.strip()

    @property
    def tag(self) -> str:
        return self.node.tag or "*"

    @property
    def has_new_lines(self) -> bool:
        return "\n" in self.raw_text or "\r" in self.raw_text

    @property
    def collapsed_text(self) -> str:
        return normalize_space(self.trimmed_text)

    def valid_classes(self) -> list[str]:
        return stable_classes(normalize_classes(self.node.classes))


class LocatorFactory:
    def __init__(
        self,
        node: ElementNode,
        config: GeneratorConfig,
        *,
        element_name: str | None = None,
        node_index: int = 0,
        container: ElementNode | None = None,
    ) -> None:
        self.config = config
        self.analyzer = NodeAnalyzer(node=node, container=container or node.container())
        self.element_name = element_name
        self.node_index = node_index
        self._locators: list[Locator] = []

    @property
    def node(self) -> ElementNode:
        return self.analyzer.node

    def generate(self) -> list[Locator]:
        if is_role_aware(self.config.tool):
            self._add_role_strategies()
        self._add_id_strategy()
        self._add_name_strategy()
        self._add_label_strategy()
        self._add_link_text_strategy()
        self._add_class_strategies()
        self._add_attribute_strategies()
        self._add_text_xpath_strategies()
        return rank_locators(self._locators, self.config.tool)

    def _add(
        self,
        key: str,
        method: LocatorMethod,
        value: str,
        priority: PriorityLevel,
        description: str,
        stability: Stability,
        *,
        render_value: str | None = None,
        extra: Mapping[str, str] | None = None,
        devtools_value: str | None = None,
    ) -> None:
        tool = self.config.tool
        language = self.config.language
        if not can_render(tool, method, language):
            return
        code = render(method, value if render_value is None else render_value, tool, language, extra)
        self._locators.append(
            Locator(
                id=f"{self.node_index}:{key}",
                element_name=self.element_name,
                tag_name=self.node.tag,
                method=method,
                value=value,
                code_snippet=code,
                priority=priority,
                description=description,
                stability=stability,
                devtools_value=devtools_value,
            )
        )

    def _text(self, key: str, **params: object) -> str:
        return message(self.config.ui_locale, key, **params)

    def _add_role_strategies(self) -> None:
        node = self.node
        thresholds = self.config.thresholds
        role = infer_role(node)

        if role in RECOGNIZED_ROLES:
            role_name = ""
            text = self.analyzer.trimmed_text
            if text and len(text) < thresholds.role_name_max and node.is_leaf:
                role_name = text
            for attr in ("placeholder", "alt", "aria-label"):
                if role_name:
                    break
                role_name = node.attr(attr) or ""

            if role_name or role in NAMELESS_ROLES:
                value = f'Role: {role}, Name: "{role_name}"' if role_name else f"Role: {role}"
                self._add(
                    "role",
                    "role",
                    value,
                    PriorityLevel.ROLE,
                    self._text("role"),
                    "High",
                    render_value="",
                    extra={"role": role, "name": role_name},
                )

        placeholder = node.attr("placeholder")
        if placeholder:
            self._add(
                "placeholder",
                "placeholder",
                placeholder,
                PriorityLevel.ROLE,
                self._text("placeholder"),
                "High",
            )

    def _add_id_strategy(self) -> None:
        id_value = self.node.id
        if not id_value:
            return
        devtools_id = css_id_selector(id_value)

        if is_dynamic_value(id_value):
            self._add(
                "id-dynamic",
                "id",
                devtools_id,
                PriorityLevel.DYNAMIC_ID,
                self._text("id_dynamic"),
                "Low",
                render_value=id_value,
            )
            return

        self._add(
            "id",
            "id",
            devtools_id,
            PriorityLevel.ROBUST_ID,
            self._text("id_robust"),
            "High",
            render_value=id_value,
        )
        css = css_id_selector(id_value, self.analyzer.tag)
        self._add("css-id", "css", css, PriorityLevel.CSS_ID, self._text("css_id"), "High")

    def _add_name_strategy(self) -> None:
        name = self.node.attr("name")
        if not name or is_dynamic_value(name):
            return
        self._add(
            "name",
            "name",
            css_name_selector(name),
            PriorityLevel.NAME,
            self._text("name"),
            "High",
            render_value=name,
        )

    def _add_label_strategy(self) -> None:
        id_value = self.node.id
        if not id_value:
            return
        label = find_label_for(self.analyzer.container, id_value)
        if label is None:
            return
        label_text = (label.text or "").strip()
        if not label_text:
            return

        if is_role_aware(self.config.tool):
            self._add(
                "label",
                "label",
                label_text,
                PriorityLevel.LABEL_FOR,
                self._text("xpath_label"),
                "High",
            )
            return

        literal = xpath_literal(normalize_space(label_text))
        xpath = f"//label[normalize-space()={literal}]/following::{self.analyzer.tag}[1]"
        self._add(
            "xpath-label",
            "xpath",
            xpath,
            PriorityLevel.XPATH_LABEL,
            self._text("xpath_label"),
            "High",
        )

    def _add_link_text_strategy(self) -> None:
        text = self.analyzer.trimmed_text
        if self.node.tag != "a" or not text:
            return
        if len(text) >= self.config.thresholds.link_text_max:
            return
        literal = xpath_literal(text)
        devtools_xpath = f"//a[text()={literal}]" if self.node.is_leaf else f"//a[normalize-space()={literal}]"
        # Role-aware tools render link text as an exact text query.
        priority = PriorityLevel.TEXT_ROLE if is_role_aware(self.config.tool) else PriorityLevel.LINK_TEXT
        self._add(
            "link-text",
            "linkText",
            text,
            priority,
            self._text("link_text"),
            "Medium",
            devtools_value=devtools_xpath,
        )

    def _add_class_strategies(self) -> None:
        tag = self.analyzer.tag
        valid_classes = self.analyzer.valid_classes()
        for class_name in valid_classes:
            self._add(
                f"css-class:{class_name}",
                "css",
                f"{tag}.{class_name}",
                PriorityLevel.CSS_CLASS,
                self._text("css_class"),
                "Medium",
            )

        if len(valid_classes) > 1:
            self._add(
                "css-multi-class",
                "css",
                f"{tag}.{'.'.join(valid_classes)}",
                PriorityLevel.CSS_CLASS,
                self._text("css_class_multi"),
                "High",
            )

    def _add_attribute_strategies(self) -> None:
        tag = self.analyzer.tag
        thresholds = self.config.thresholds
        for name, raw_value in self.node.attributes.items():
            if name in EXCLUDED_ATTRIBUTES or is_framework_attribute(name):
                continue
            if not _ATTRIBUTE_NAME_PATTERN.match(name):
                continue
            value = raw_value or ""
            important = name in thresholds.important_attributes
            if not important and not (value and len(value) < thresholds.attribute_value_max):
                continue

            test_id = is_test_id_attribute(name)
            self._add(
                f"css-attr:{name}",
                "css",
                f"{tag}[{name}={css_attribute_literal(value)}]",
                PriorityLevel.CSS_ID if test_id else PriorityLevel.CSS_ATTR,
                self._text("css_attr", attr=name),
                "High" if test_id else "Medium",
            )
            self._add(
                f"xpath-attr:{name}",
                "xpath",
                f"//{tag}[@{name}={xpath_literal(value)}]",
                PriorityLevel.XPATH_COMPLEX,
                self._text("xpath_attr"),
                "Medium",
            )

    def _add_text_xpath_strategies(self) -> None:
        analyzer = self.analyzer
        thresholds = self.config.thresholds
        tag = analyzer.tag
        text = analyzer.trimmed_text
        if not text or tag in TEXT_EXCLUDED_TAGS:
            return

        literal = xpath_literal(text)
        if self.node.is_leaf and not analyzer.has_new_lines and analyzer.raw_text == text:
            self._add(
                "xpath-text-exact",
                "xpath",
                f"//{tag}[text()={literal}]",
                PriorityLevel.XPATH_TEXT,
                self._text("xpath_text_exact"),
                "High",
            )
            valid_classes = analyzer.valid_classes()
            if valid_classes:
                self._add(
                    "xpath-text-class",
                    "xpath",
                    f"//{tag}[text()={literal} and contains(@class, {xpath_literal(valid_classes[0])})]",
                    PriorityLevel.XPATH_COMPLEX,
                    self._text("xpath_text_class"),
                    "High",
                )

        if len(text) < thresholds.normalized_text_max:
            self._add(
                "xpath-text-normalized",
                "xpath",
                f"//{tag}[normalize-space()={xpath_literal(analyzer.collapsed_text)}]",
                PriorityLevel.XPATH_TEXT,
                self._text("xpath_text"),
                "High",
            )

        if thresholds.contains_text_min < len(text) < thresholds.contains_text_max:
            part = xpath_literal(text[: thresholds.contains_prefix_length])
            if self.node.is_leaf:
                self._add(
                    "xpath-contains-text",
                    "xpath",
                    f"//{tag}[contains(text(), {part})]",
                    PriorityLevel.XPATH_COMPLEX,
                    self._text("xpath_contains"),
                    "Medium",
                )
            else:
                self._add(
                    "xpath-contains-dot",
                    "xpath",
                    f"//{tag}[contains(., {part})]",
                    PriorityLevel.XPATH_COMPLEX,
                    self._text("xpath_contains_nested"),
                    "Medium",
                )


def generate_locators_for_node(
    node: ElementNode,
    config: GeneratorConfig,
    *,
    element_name: str | None = None,
    node_index: int = 0,
    container: ElementNode | None = None,
) -> list[Locator]:
    name = element_name if element_name is not None else suggest_element_name(
        node, config.thresholds.element_name_text_max
    )
    factory = LocatorFactory(
        node,
        config,
        element_name=name,
        node_index=node_index,
        container=container,
    )
    return factory.generate()
