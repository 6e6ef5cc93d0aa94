"""
Mapping-shaped view over ElementTree documents.

EPUB documents are walked by element name rather than by XPath: each element
becomes a Node whose children are grouped by local tag name, so
``package.get("manifest").get("item")`` reads the way the document does.
A tag that occurs once yields a single Node and a repeated tag yields a list;
``as_list`` folds both shapes into a list for callers that iterate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union
from xml.etree import ElementTree as ET

NodeGroup = Union["Node", list["Node"], None]


def local_name(name: str) -> str:
    """Strip a ``{uri}`` or ``prefix:`` namespace from a tag or attribute."""
    if name.startswith("{"):
        name = name.split("}", 1)[1]
    return name.rsplit(":", 1)[-1]


def as_list(value: NodeGroup) -> list[Node]:
    """Normalize a child group (absent, single or repeated) to a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


@dataclass
class Node:
    """One XML element.

    ``attributes`` is keyed by local attribute name and ``text`` holds the
    element's own character data (not its descendants'), untrimmed.
    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    text: str | None = None
    children: dict[str, list[Node]] = field(default_factory=dict)

    def get(self, name: str, ignore_case: bool = False) -> NodeGroup:
        """Return the child group called ``name``.

        None when absent, a Node when the tag occurs once and a list when it
        repeats. ``ignore_case`` merges groups whose names differ only by case.
        """
        if ignore_case:
            wanted = name.lower()
            group = [
                node
                for key, nodes in self.children.items()
                if key.lower() == wanted
                for node in nodes
            ]
        else:
            group = self.children.get(name, [])
        if not group:
            return None
        if len(group) == 1:
            return group[0]
        return list(group)

    def first(self, name: str, ignore_case: bool = False) -> Node | None:
        """Return the first child called ``name``, if any."""
        group = as_list(self.get(name, ignore_case))
        return group[0] if group else None

    def attr(self, name: str, default: str | None = None) -> str | None:
        return self.attributes.get(name, default)

    @property
    def value(self) -> str:
        """Trimmed text content, empty when the element has none."""
        return (self.text or "").strip()

    def groups(self) -> list[tuple[str, list[Node]]]:
        """Child groups in first-occurrence order."""
        return list(self.children.items())


def _node(element: ET.Element) -> Node:
    return Node(
        tag=local_name(element.tag),
        attributes={local_name(k): v for k, v in element.attrib.items()},
    )


def _convert(root: ET.Element) -> Node:
    # Explicit stack: nesting depth is bounded by the document, not by Python
    top = _node(root)
    stack = [(root, top)]
    while stack:
        element, node = stack.pop()
        parts = [element.text] if element.text else []
        for child in element:
            # Comments and processing instructions have non-string tags
            if isinstance(child.tag, str):
                converted = _node(child)
                node.children.setdefault(converted.tag, []).append(converted)
                stack.append((child, converted))
            if child.tail:
                parts.append(child.tail)
        if parts:
            node.text = "".join(parts)
    return top


def parse_xml(source: str | bytes) -> Node:
    """Parse an XML document into a Node tree rooted at the document element.

    Raises:
        xml.etree.ElementTree.ParseError: If the document is not well formed.
    """
    return _convert(ET.fromstring(source))


__all__ = ["Node", "NodeGroup", "as_list", "local_name", "parse_xml"]
