from __future__ import annotations

import logging
from typing import Iterable

from .duplicate_resolver import resolve_duplicates
from .locator_generator import generate_locators_for_node
from .models import ROOT_GROUP_KEY, ElementNode, GeneratorConfig, Locator, LocatorGroup
from .name_suggester import suggest_element_name
from .selector_rules import is_event_attribute

logger = logging.getLogger(__name__)

INTERACTIVE_TAGS = {"input", "button", "select", "textarea", "a"}
INTERACTIVE_ROLES = {"button", "checkbox", "link", "menuitem", "tab", "switch", "option"}
CONTENT_LEAF_TAGS = {
    "span",
    "div",
    "p",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "li",
    "td",
    "th",
    "strong",
    "b",
    "em",
    "i",
    "small",
}


def has_event_attribute(node: ElementNode) -> bool:
    return any(is_event_attribute(name) for name in node.attributes)


def is_deep_scan_candidate(node: ElementNode) -> bool:
    tag = node.tag
    if tag in INTERACTIVE_TAGS or tag == "label":
        return True
    if (node.attr("role") or "") in INTERACTIVE_ROLES:
        return True
    if has_event_attribute(node):
        return True
    if tag == "svg" and node.parent is not None and node.parent.tag in {"button", "a"}:
        return True

    return node.is_leaf and bool(node.text.strip()) and tag in CONTENT_LEAF_TAGS


def select_nodes(root: ElementNode | None, deep_scan: bool = False) -> list[ElementNode]:
    if root is None:
        return []
    nodes = [root]
    if deep_scan:
        nodes.extend(node for node in root.iter_descendants() if is_deep_scan_candidate(node))
    return nodes


def _collect(root: ElementNode | None, config: GeneratorConfig) -> list[Locator]:
    nodes = select_nodes(root, config.deep_scan)
    if not nodes:
        return []

    container = nodes[0].container()
    locators: list[Locator] = []
    for node_index, node in enumerate(nodes):
        name = suggest_element_name(node, config.thresholds.element_name_text_max)
        locators.extend(
            generate_locators_for_node(
                node,
                config,
                element_name=name,
                node_index=node_index,
                container=container,
            )
        )

    logger.debug(
        "Generated %s locator(s) from %s node(s) for %s/%s.",
        len(locators),
        len(nodes),
        config.tool,
        config.language,
    )
    return resolve_duplicates(locators, config.tool, config.language, config.ui_locale)


def generate_locators(root: ElementNode | None, config: GeneratorConfig) -> list[Locator]:
    """Generate, rank and de-duplicate locators for the root (and scanned descendants).

    Each node's locators stay contiguous and in ranked order; nodes follow document order
    with the root first. A missing root yields an empty list.
    """
    return _collect(root, config)


def group_locators(locators: Iterable[Locator]) -> list[LocatorGroup]:
    groups: dict[str, LocatorGroup] = {}
    for locator in locators:
        key = locator.element_name or ROOT_GROUP_KEY
        group = groups.get(key)
        if group is None:
            group = LocatorGroup(key=key)
            groups[key] = group
        group.locators.append(locator)
    return list(groups.values())


def generate_locator_groups(root: ElementNode | None, config: GeneratorConfig) -> list[LocatorGroup]:
    return group_locators(_collect(root, config))


def analyze(root: ElementNode | None, config: GeneratorConfig) -> list[Locator] | list[LocatorGroup]:
    if config.deep_scan:
        return generate_locator_groups(root, config)
    return generate_locators(root, config)


def representative_locators(groups: Iterable[LocatorGroup]) -> list[Locator]:
    return [group.best for group in groups if group.best is not None]
