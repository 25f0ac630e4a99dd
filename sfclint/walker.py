"""
sfclint/walker.py
=================

Depth-first traversal of a template tree.

For each element the walker calls, in order::

    enter_element(element)
    visit_static_attribute / visit_directive_attribute   (per attribute)
    ... children, recursively ...
    leave_element(element)

Text and comment nodes are skipped.  Dispatch is on the explicit
``NodeKind`` / ``AttributeKind`` tags of :mod:`sfclint.template_ast`.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional

from sfclint.elements import (
    is_builtin_component_name,
    is_html_well_known_element_name,
    is_svg_well_known_element_name,
)
from sfclint.template_ast import (
    Attribute,
    AttributeKind,
    Element,
    Namespace,
    NodeKind,
    TemplateNode,
)


class ElementClass(Enum):
    HOST = auto()       # HTML / SVG vocabulary, or a namespace we do not check
    BUILTIN = auto()    # framework-provided component
    CUSTOM = auto()     # a component that has to be registered


def is_builtin_component(element: Element) -> bool:
    """
    Framework built-ins are recognised only in the HTML namespace and only
    for names that are not already well-known HTML elements.
    """
    return (
        element.namespace is Namespace.HTML
        and not is_html_well_known_element_name(element.raw_name)
        and is_builtin_component_name(element.raw_name)
    )


def classify_element(element: Element) -> ElementClass:
    if element.namespace not in (Namespace.HTML, Namespace.SVG):
        return ElementClass.HOST
    if (
        is_html_well_known_element_name(element.raw_name)
        or is_svg_well_known_element_name(element.raw_name)
    ):
        return ElementClass.HOST
    if is_builtin_component(element):
        return ElementClass.BUILTIN
    return ElementClass.CUSTOM


class TemplateVisitor:
    """No-op base; subclasses override the events they care about."""

    def enter_element(self, element: Element) -> None:
        pass

    def leave_element(self, element: Element) -> None:
        pass

    def visit_static_attribute(self, attribute: Attribute, element: Element) -> None:
        pass

    def visit_directive_attribute(self, attribute: Attribute, element: Element) -> None:
        pass


class TemplateWalker:
    """Feeds a :class:`TemplateVisitor` with traversal events."""

    def __init__(self, visitor: TemplateVisitor) -> None:
        self.visitor = visitor

    def walk(self, root: Optional[Element]) -> None:
        if root is not None:
            self._walk_node(root)

    def _walk_node(self, node: TemplateNode) -> None:
        kind = node.kind
        if kind is NodeKind.ELEMENT:
            self._walk_element(node)  # type: ignore[arg-type]
        elif kind is NodeKind.TEXT or kind is NodeKind.COMMENT:
            return
        else:
            raise AssertionError(f"unhandled node kind: {kind}")

    def _walk_element(self, element: Element) -> None:
        self.visitor.enter_element(element)
        for attribute in element.attributes:
            self._walk_attribute(attribute, element)
        for child in element.children:
            self._walk_node(child)
        self.visitor.leave_element(element)

    def _walk_attribute(self, attribute: Attribute, element: Element) -> None:
        if attribute.kind is AttributeKind.STATIC:
            self.visitor.visit_static_attribute(attribute, element)
        elif attribute.kind is AttributeKind.DIRECTIVE:
            self.visitor.visit_directive_attribute(attribute, element)
        else:
            raise AssertionError(f"unhandled attribute kind: {attribute.kind}")


__all__ = [
    "ElementClass",
    "TemplateVisitor",
    "TemplateWalker",
    "classify_element",
    "is_builtin_component",
]
