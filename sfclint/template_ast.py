"""sfclint/template_ast.py – Tagged-variant model of a parsed single-file component.

The parser (:mod:`sfclint.sfc_parser`) produces these nodes and the rule
engine consumes them.  Every node carries an explicit kind tag
(:class:`NodeKind`, :class:`AttributeKind`, :class:`ExpressionKind`) so that
traversal code dispatches on the tag instead of probing node shapes.

Design invariants
-----------------
* Leaf nodes (attributes, expressions, text, comments) are frozen
  dataclasses.
* ``Element`` keeps a mutable ``children`` list because the parser appends
  to it while the element is still open; nothing mutates it afterwards.
* Every node records its source location (``SourceLoc``) for diagnostics.
  Lines and columns are 1-based.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, List, Optional, Tuple, Union

# ════════════════════════════════════════════════════════════════════════
# §1  Source location
# ════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SourceLoc:
    """A position in a ``.vue`` source file."""

    file: str = "<unknown>"
    line: int = 0
    col: int = 0

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.col}"


#: Sentinel for synthesised nodes.
NO_LOC = SourceLoc()


# ════════════════════════════════════════════════════════════════════════
# §2  Kind tags
# ════════════════════════════════════════════════════════════════════════


class Namespace(Enum):
    HTML = auto()
    SVG = auto()
    MATHML = auto()


class NodeKind(Enum):
    ELEMENT = auto()
    TEXT = auto()
    COMMENT = auto()


class AttributeKind(Enum):
    STATIC = auto()      # name="value"
    DIRECTIVE = auto()   # v-bind:name="expr", :name, @name, #name, .name


class ExpressionKind(Enum):
    LITERAL = auto()     # a single string / number / boolean / null literal
    OTHER = auto()       # anything that cannot be resolved statically


# ════════════════════════════════════════════════════════════════════════
# §3  Template nodes
# ════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Expression:
    """A directive value.  ``value`` is only meaningful for literals."""

    kind: ExpressionKind
    source: str
    value: Any = None
    loc: SourceLoc = field(default=NO_LOC, repr=False)

    @property
    def is_string_literal(self) -> bool:
        return self.kind is ExpressionKind.LITERAL and isinstance(self.value, str)


@dataclass(frozen=True, slots=True)
class Attribute:
    """
    One attribute of a start tag.

    Static attributes use ``value`` (``None`` for a valueless attribute).
    Directives use ``directive`` (``"bind"``, ``"on"``, ``"slot"``, …),
    ``argument`` (``None`` when absent or dynamic), ``modifiers`` and
    ``expression``.
    """

    kind: AttributeKind
    name: str
    loc: SourceLoc = field(default=NO_LOC, repr=False)
    value: Optional[str] = None
    directive: Optional[str] = None
    argument: Optional[str] = None
    modifiers: Tuple[str, ...] = ()
    expression: Optional[Expression] = None


@dataclass(frozen=True, slots=True)
class Text:
    text: str
    loc: SourceLoc = field(default=NO_LOC, repr=False)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.TEXT


@dataclass(frozen=True, slots=True)
class Comment:
    """An HTML comment; ``text`` excludes the ``<!--``/``-->`` delimiters."""

    text: str
    loc: SourceLoc = field(default=NO_LOC, repr=False)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.COMMENT


@dataclass(eq=False)
class Element:
    """
    A markup element.

    ``name`` is lower-cased for HTML-namespace elements; ``raw_name`` keeps
    the spelling used in the source (``MyWidget`` stays ``MyWidget``).
    """

    name: str
    raw_name: str
    namespace: Namespace = Namespace.HTML
    attributes: Tuple[Attribute, ...] = ()
    children: List["TemplateNode"] = field(default_factory=list)
    loc: SourceLoc = field(default=NO_LOC, repr=False)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.ELEMENT

    def has_attribute(self, name: str) -> bool:
        """True if a *static* attribute called ``name`` is present."""
        return any(
            attr.kind is AttributeKind.STATIC and attr.name == name
            for attr in self.attributes
        )

    def get_attribute(self, name: str) -> Optional[Attribute]:
        for attr in self.attributes:
            if attr.kind is AttributeKind.STATIC and attr.name == name:
                return attr
        return None

    def __repr__(self) -> str:
        return f"<Element {self.raw_name!r} at {self.loc}>"


TemplateNode = Union[Element, Text, Comment]


# ════════════════════════════════════════════════════════════════════════
# §4  Script-side declarations
# ════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class RegisteredComponent:
    """One entry of a ``components: {…}`` registration object."""

    name: str
    loc: SourceLoc = field(default=NO_LOC, repr=False)


@dataclass(frozen=True, slots=True)
class ComponentDeclaration:
    """
    The declaration object of one component definition.

    ``mixins`` and ``extends`` only hold objects written inline; mixins
    imported from other modules are not visible here.
    """

    loc: SourceLoc = NO_LOC
    components: Tuple[RegisteredComponent, ...] = ()
    mixins: Tuple["ComponentDeclaration", ...] = ()
    extends: Optional["ComponentDeclaration"] = None


# ════════════════════════════════════════════════════════════════════════
# §5  Document
# ════════════════════════════════════════════════════════════════════════


@dataclass(eq=False)
class SfcDocument:
    """
    One parsed ``.vue`` file.

    ``template`` is the first top-level ``<template>`` block (``None`` when
    the file has none).  ``comments`` lists every markup comment in source
    order, used for inline suppressions.
    """

    path: str
    source: str = ""
    template: Optional[Element] = None
    declarations: Tuple[ComponentDeclaration, ...] = ()
    comments: Tuple[Comment, ...] = ()

    def __repr__(self) -> str:
        return f"<SfcDocument {self.path!r}>"


__all__ = [
    "SourceLoc",
    "NO_LOC",
    "Namespace",
    "NodeKind",
    "AttributeKind",
    "ExpressionKind",
    "Expression",
    "Attribute",
    "Text",
    "Comment",
    "Element",
    "TemplateNode",
    "RegisteredComponent",
    "ComponentDeclaration",
    "SfcDocument",
]
