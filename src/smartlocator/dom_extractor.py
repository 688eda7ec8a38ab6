from __future__ import annotations

from typing import Any, Mapping, TYPE_CHECKING

from .models import ElementNode

if TYPE_CHECKING:
    from playwright.sync_api import ElementHandle, Page

_SERIALIZE_SCRIPT = """
(el) => {
  const serialize = (node) => {
    const attrs = {};
    for (const attr of Array.from(node.attributes || [])) {
      attrs[attr.name] = attr.value;
    }
    return {
      tag: (node.tagName || '').toLowerCase(),
      attributes: attrs,
      text: node.textContent || '',
      children: Array.from(node.children || []).map(serialize),
    };
  };

  const root = el.ownerDocument.body || el.ownerDocument.documentElement;
  const path = [];
  let current = el;
  while (current && current !== root && current.parentElement) {
    path.unshift(Array.prototype.indexOf.call(current.parentElement.children, current));
    current = current.parentElement;
  }
  if (current !== root) {
    return { tree: serialize(el), target_path: [] };
  }
  return { tree: serialize(root), target_path: path };
}
"""


def _build_node(payload: Mapping[str, Any]) -> ElementNode:
    attributes = {str(key): str(value) for key, value in dict(payload.get("attributes") or {}).items()}
    children = [_build_node(child) for child in payload.get("children") or [] if isinstance(child, Mapping)]
    return ElementNode(
        tag=str(payload.get("tag") or ""),
        attributes=attributes,
        text=str(payload.get("text") or ""),
        children=children,
    )


def build_element_tree(payload: Mapping[str, Any]) -> ElementNode | None:
    """Rebuild an ``ElementNode`` tree from a serialized document and return the target node.

    ``payload`` holds ``tree`` (nested ``tag``/``attributes``/``text``/``children`` maps) and
    ``target_path``, the child indices leading from the tree root to the target element.
    """
    tree = payload.get("tree")
    if not isinstance(tree, Mapping) or not tree.get("tag"):
        return None

    node = _build_node(tree)
    for index in payload.get("target_path") or []:
        position = int(index)
        if position < 0 or position >= len(node.children):
            return None
        node = node.children[position]
    return node


def extract_element_tree(element: ElementHandle) -> ElementNode | None:
    payload: dict[str, Any] = element.evaluate(_SERIALIZE_SCRIPT)
    return build_element_tree(payload)


def extract_from_page(page: Page, selector: str) -> ElementNode | None:
    element = page.query_selector(selector)
    if element is None:
        return None
    return extract_element_tree(element)
