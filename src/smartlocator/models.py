from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, Literal

Tool = Literal["selenium", "playwright", "cypress", "appium", "katalon", "robot"]
ProgrammingLanguage = Literal["java", "python", "csharp", "javascript", "typescript", "ruby", "groovy", "robot"]
LocatorMethod = Literal["id", "name", "linkText", "css", "xpath", "role", "label", "placeholder", "text"]
Stability = Literal["High", "Medium", "Low"]

ROOT_GROUP_KEY = "__root__"


class PriorityLevel(IntEnum):
    ROLE = 0
    ROBUST_ID = 1
    NAME = 2
    LABEL_FOR = 3
    LINK_TEXT = 4
    TEXT_ROLE = 5
    CSS_ID = 6
    CSS_CLASS = 7
    CSS_ATTR = 8
    XPATH_TEXT = 9
    XPATH_LABEL = 10
    XPATH_CONTEXT = 11
    XPATH_COMPLEX = 12
    DYNAMIC_ID = 13


@dataclass(slots=True, eq=False)
class ElementNode:
    """Read-only view of one markup element.

    ``text`` is the full text content of the element (descendant text included, whitespace
    untouched), the way a DOM ``textContent`` reads. ``id`` and ``classes`` are derived from the
    attribute map so the two can never disagree.
    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""
    parent: ElementNode | None = field(default=None, repr=False)
    children: list[ElementNode] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.tag = (self.tag or "").strip().lower()
        for child in self.children:
            child.parent = self

    @property
    def id(self) -> str:
        return (self.attributes.get("id") or "").strip()

    @property
    def classes(self) -> list[str]:
        return [token for token in (self.attributes.get("class") or "").split() if token]

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def attr(self, key: str) -> str | None:
        value = self.attributes.get(key)
        return value if value else None

    def has_attr(self, key: str) -> bool:
        return key in self.attributes

    def append(self, child: ElementNode) -> ElementNode:
        child.parent = self
        self.children.append(child)
        return child

    def iter_descendants(self) -> Iterator[ElementNode]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def container(self) -> ElementNode:
        current = self
        while current.parent is not None:
            current = current.parent
        return current


@dataclass(frozen=True, slots=True)
class Locator:
    id: str
    element_name: str | None
    tag_name: str
    method: LocatorMethod
    value: str
    code_snippet: str
    priority: PriorityLevel
    description: str
    stability: Stability
    devtools_value: str | None = None


@dataclass(slots=True)
class LocatorGroup:
    key: str
    locators: list[Locator] = field(default_factory=list)

    @property
    def best(self) -> Locator | None:
        return self.locators[0] if self.locators else None


@dataclass(frozen=True, slots=True)
class HeuristicThresholds:
    link_text_max: int = 50
    attribute_value_max: int = 40
    normalized_text_max: int = 200
    contains_text_min: int = 2
    contains_text_max: int = 100
    contains_prefix_length: int = 25
    role_name_max: int = 30
    element_name_text_max: int = 20
    important_attributes: tuple[str, ...] = (
        "placeholder",
        "name",
        "type",
        "data-testid",
        "data-cy",
        "role",
        "title",
        "alt",
        "for",
        "href",
        "src",
        "value",
        "aria-label",
    )


DEFAULT_THRESHOLDS = HeuristicThresholds()


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    tool: Tool
    language: ProgrammingLanguage
    deep_scan: bool = False
    ui_locale: str = "en"
    thresholds: HeuristicThresholds = DEFAULT_THRESHOLDS
