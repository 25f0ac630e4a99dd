"""
sfc_parser.py — Single-file component front end
===============================================

Turns the text of a ``.vue`` file into an :class:`~sfclint.template_ast.SfcDocument`.

Usage::

    from sfclint.sfc_parser import parse_sfc, parse_file

    doc = parse_sfc(source, path="Widget.vue")
    doc.template            # first top-level <template> element, or None
    doc.declarations        # component definitions found in <script>

Two PEG grammars do the work:

* ``MARKUP_GRAMMAR`` tokenises markup into start tags, end tags, comments,
  text and raw ``<script>``/``<style>`` blocks.  The element tree is then
  rebuilt from the token stream with an open-element stack, tolerating
  void elements, self-closing tags and stray end tags.
* ``SCRIPT_GRAMMAR`` parses JavaScript object literals just deeply enough
  to read the keys of ``components``, ``mixins`` and ``extends``; every
  other value is skipped as balanced opaque text.

Depends on:
    - parsimonious (PEG parser)
"""

from __future__ import annotations

import bisect
import html
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from parsimonious.exceptions import ParseError, VisitationError
from parsimonious.grammar import Grammar
from parsimonious.nodes import NodeVisitor

from sfclint.elements import HTML_VOID_ELEMENT_NAMES
from sfclint.errors import SfcReadError
from sfclint.template_ast import (
    Attribute,
    AttributeKind,
    Comment,
    ComponentDeclaration,
    Element,
    Expression,
    ExpressionKind,
    Namespace,
    RegisteredComponent,
    SfcDocument,
    SourceLoc,
    Text,
)

_log = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  PART 1 — GRAMMARS (Parsimonious PEG)
# ═══════════════════════════════════════════════════════════════════

MARKUP_GRAMMAR = Grammar(r'''
    document        = token*
    token           = comment / raw_block / end_tag / start_tag / mustache / text

    comment         = ~r"<!--(.*?)-->"s
    raw_block       = script_block / style_block
    script_block    = ~r"<script(?=[\s/>])"i attribute* _ ">" ~r"(?:(?!</script\s*>).)*"is ~r"</script\s*>"i
    style_block     = ~r"<style(?=[\s/>])"i attribute* _ ">" ~r"(?:(?!</style\s*>).)*"is ~r"</style\s*>"i

    start_tag       = "<" tag_name attribute* _ self_closing ">"
    self_closing    = "/"?
    end_tag         = "</" tag_name _ ">"
    tag_name        = ~r"[A-Za-z][^\s/>]*"

    attribute       = __ attr_name attr_assign?
    attr_assign     = _ "=" _ attr_value
    attr_name       = ~r"[^\s\"'<>/=]+"
    attr_value      = dq_value / sq_value / unquoted_value
    dq_value        = ~r'"[^"]*"'
    sq_value        = ~r"'[^']*'"
    unquoted_value  = ~r"[^\s\"'=<>`]+"

    mustache        = ~r"\{\{.*?\}\}"s
    text            = ~r"[^<{]+" / "<" / "{"

    _               = ~r"\s*"
    __              = ~r"\s+"
''')

SCRIPT_GRAMMAR = Grammar(r'''
    object          = "{" _ member_list? _ "}"
    member_list     = member more_member* trailing_comma?
    more_member     = _ "," _ member
    trailing_comma  = _ ","
    member          = spread / method / pair / shorthand
    spread          = "..." _ value
    pair            = key _ ":" _ value
    method          = method_prefix key _ paren_group _ brace_group
    method_prefix   = ~r"(?:(?:get|set|static)\s+(?=[\w$\[\"'])|async\s+(?:\*\s*)?|\*\s*)?"
    shorthand       = identifier _

    key             = identifier / string / number / computed_literal / bracket_group
    computed_literal = "[" _ string _ "]"

    value           = object_value / array_value / opaque
    object_value    = object &value_end
    array_value     = array &value_end
    value_end       = _ ~r"[,}\]]"

    array           = "[" _ element_list _ "]"
    element_list    = value? more_element*
    more_element    = _ "," _ value?

    opaque          = opaque_part+
    opaque_part     = balanced / string / template / comment / regex_literal / ~r"[^,;{}\[\]()'\"`/]+" / "/"
    balanced        = paren_group / bracket_group / brace_group
    paren_group     = "(" inner* ")"
    bracket_group   = "[" inner* "]"
    brace_group     = "{" inner* "}"
    inner           = balanced / string / template / comment / regex_literal / ~r"[^()\[\]{}'\"`/]+" / "/"

    literal         = _ (string / number / keyword_literal) _
    identifier      = ~r"[A-Za-z_$][\w$]*"
    string          = sq_string / dq_string
    sq_string       = ~r"'(?:[^'\\\n]|\\.)*'"s
    dq_string       = ~r'"(?:[^"\\\n]|\\.)*"'s
    template        = ~r"`(?:[^`\\]|\\.)*`"s
    regex_literal   = ~r"(?<![\w$)\]])(?<![\w$)\]]\s)(?<![\w$)\]]\s\s)/(?![/*])(?:[^/\\\n\[]|\\.|\[(?:[^\]\\\n]|\\.)*\])+/[a-z]*"
    number          = ~r"(?:0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+|(?:\d[\d_]*\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)n?"
    keyword_literal = ~r"(?:true|false|null)(?![\w$])"

    comment         = line_comment / block_comment
    line_comment    = ~r"//[^\n]*"
    block_comment   = ~r"/\*.*?\*/"s
    _               = (~r"\s+" / comment)*
''')

# Places where a component definition object starts.  The lookahead leaves
# the match end on the opening brace.
_DEFINITION_RE = re.compile(
    r"""
      \bexport\s+default\s+(?:defineComponent\s*\(\s*)?(?=\{)
    | \b(?:defineComponent|createApp|Vue\.extend|Vue\.mixin)\s*\(\s*(?=\{)
    | \bnew\s+Vue\s*\(\s*(?=\{)
    | \b(?:Vue|app)\.component\s*\(\s*(?:'[^'\n]*'|"[^"\n]*"|`[^`]*`)\s*,\s*(?=\{)
    """,
    re.VERBOSE,
)

# Comments, string literals and regex literals.  A definition site that
# starts inside one of these is text, not code.
_SKIPPED_TEXT_RE = re.compile(
    r"""
      //[^\n]*
    | /\*.*?(?:\*/|\Z)
    | '(?:[^'\\\n]|\\.)*'
    | "(?:[^"\\\n]|\\.)*"
    | `(?:[^`\\]|\\.)*`
    | (?<![\w$)\]])(?<![\w$)\]]\s)(?<![\w$)\]]\s\s)/(?![/*])(?:[^/\\\n\[]|\\.|\[(?:[^\]\\\n]|\\.)*\])+/[a-z]*
    """,
    re.S | re.VERBOSE,
)

_JS_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_JS_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|.)", re.S)


def _unescape_js(body: str) -> str:
    """Decode the escape sequences of a JavaScript string body."""
    def _sub(m: re.Match) -> str:
        esc = m.group(1)
        if esc.startswith("u{"):
            return chr(int(esc[2:-1], 16))
        if esc.startswith("u") and len(esc) == 5:
            return chr(int(esc[1:], 16))
        if esc.startswith("x") and len(esc) == 3:
            return chr(int(esc[1:], 16))
        if esc in ("\n", "\r\n"):
            return ""
        return _JS_ESCAPES.get(esc, esc)
    return _JS_ESCAPE_RE.sub(_sub, body)


def _number_value(text: str) -> Union[int, float]:
    text = text.replace("_", "").rstrip("n")
    lowered = text.lower()
    if lowered.startswith(("0x", "0o", "0b")):
        return int(text, 0)
    value = float(text)
    return int(value) if value.is_integer() and "." not in text and "e" not in lowered else value


# ═══════════════════════════════════════════════════════════════════
#  PART 2 — SOURCE POSITIONS
# ═══════════════════════════════════════════════════════════════════

class _LineIndex:
    """Maps character offsets to 1-based (line, column) locations."""

    def __init__(self, source: str, path: str) -> None:
        self.path = path
        self._starts = [0]
        for m in re.finditer(r"\n", source):
            self._starts.append(m.end())

    def loc(self, offset: int) -> SourceLoc:
        line = bisect.bisect_right(self._starts, offset) - 1
        return SourceLoc(file=self.path, line=line + 1, col=offset - self._starts[line] + 1)


# ═══════════════════════════════════════════════════════════════════
#  PART 3 — SCRIPT VISITOR (Parse Tree → object literals)
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ObjectLiteral:
    members: Tuple[Tuple[Optional[str], Any, SourceLoc], ...]
    loc: SourceLoc


@dataclass(frozen=True)
class ArrayLiteral:
    elements: Tuple[Any, ...]
    loc: SourceLoc


class ScriptBuilder(NodeVisitor):
    """
    Builds :class:`ObjectLiteral` / :class:`ArrayLiteral` values from a
    ``SCRIPT_GRAMMAR`` parse tree.

    A member is ``(key, value, loc)``; ``key`` is ``None`` for spreads and
    non-literal computed keys, ``value`` is ``None`` for anything that is
    neither an object nor an array literal.
    """

    def __init__(self, locate: Callable[[int], SourceLoc]) -> None:
        self._locate = locate

    def generic_visit(self, node, visited_children):
        return visited_children or node

    # ── objects ─────────────────────────────────────────────────────

    def visit_object(self, node, visited_children):
        _, _, members, _, _ = visited_children
        items = members[0] if isinstance(members, list) else []
        return ObjectLiteral(members=tuple(items), loc=self._locate(node.start))

    def visit_member_list(self, node, visited_children):
        first, rest, _ = visited_children
        members = [first] + (rest if isinstance(rest, list) else [])
        return [m for m in members if m is not None]

    def visit_more_member(self, node, visited_children):
        return visited_children[3]

    def visit_member(self, node, visited_children):
        return visited_children[0]

    def visit_spread(self, node, visited_children):
        return None

    def visit_pair(self, node, visited_children):
        key, _, _, _, value = visited_children
        return (key, value, self._locate(node.start))

    def visit_method(self, node, visited_children):
        return (visited_children[1], None, self._locate(node.children[1].start))

    def visit_shorthand(self, node, visited_children):
        return (visited_children[0], None, self._locate(node.start))

    def visit_key(self, node, visited_children):
        key = visited_children[0]
        return key if isinstance(key, str) else None

    def visit_computed_literal(self, node, visited_children):
        return visited_children[2]

    # ── values ──────────────────────────────────────────────────────

    def visit_value(self, node, visited_children):
        return visited_children[0]

    def visit_object_value(self, node, visited_children):
        return visited_children[0]

    def visit_array_value(self, node, visited_children):
        return visited_children[0]

    def visit_opaque(self, node, visited_children):
        return None

    def visit_array(self, node, visited_children):
        return ArrayLiteral(elements=tuple(visited_children[2]), loc=self._locate(node.start))

    def visit_element_list(self, node, visited_children):
        first, rest = visited_children
        elements = [first[0]] if isinstance(first, list) else []
        elements.extend(rest if isinstance(rest, list) else [])
        return [e for e in elements if e is not None]

    def visit_more_element(self, node, visited_children):
        value = visited_children[3]
        return value[0] if isinstance(value, list) else None

    # ── atoms ───────────────────────────────────────────────────────

    def visit_identifier(self, node, visited_children):
        return node.text

    def visit_string(self, node, visited_children):
        return _unescape_js(node.text[1:-1])

    def visit_number(self, node, visited_children):
        return node.text

    def visit_literal(self, node, visited_children):
        alternative = node.children[1].children[0]
        if alternative.expr_name == "number":
            return _number_value(alternative.text)
        if alternative.expr_name == "keyword_literal":
            return {"true": True, "false": False, "null": None}[alternative.text]
        return visited_children[1][0]


def parse_expression(source: str, loc: SourceLoc) -> Expression:
    """
    Classify a directive value.

    A value that is exactly one string, number, boolean or ``null``
    literal becomes a ``LITERAL`` expression carrying its value; anything
    else is ``OTHER``.
    """
    try:
        tree = SCRIPT_GRAMMAR["literal"].parse(source)
        value = ScriptBuilder(lambda _offset: loc).visit(tree)
    except (ParseError, VisitationError):
        return Expression(kind=ExpressionKind.OTHER, source=source, loc=loc)
    return Expression(kind=ExpressionKind.LITERAL, source=source, value=value, loc=loc)


def _to_declaration(obj: ObjectLiteral) -> ComponentDeclaration:
    components: Optional[Tuple[RegisteredComponent, ...]] = None
    mixins: List[ComponentDeclaration] = []
    extends: Optional[ComponentDeclaration] = None
    for key, value, _loc in obj.members:
        if key == "components" and components is None and isinstance(value, ObjectLiteral):
            components = tuple(
                RegisteredComponent(name=name, loc=name_loc)
                for name, _, name_loc in value.members
                if name is not None
            )
        elif key == "mixins" and isinstance(value, ArrayLiteral):
            mixins.extend(
                _to_declaration(el) for el in value.elements
                if isinstance(el, ObjectLiteral)
            )
        elif key == "extends" and isinstance(value, ObjectLiteral):
            extends = _to_declaration(value)
    return ComponentDeclaration(
        loc=obj.loc,
        components=components or (),
        mixins=tuple(mixins),
        extends=extends,
    )


def parse_component_declarations(
    source: str,
    start: int = 0,
    end: Optional[int] = None,
    index: Optional[_LineIndex] = None,
) -> List[ComponentDeclaration]:
    """
    Find every component definition object in ``source[start:end]``.

    Objects the grammar cannot read are logged and skipped, and so are
    definition sites that sit inside a comment or a literal.
    """
    index = index or _LineIndex(source, "<script>")
    end = len(source) if end is None else end
    builder = ScriptBuilder(index.loc)
    skipped = [(m.start(), m.end()) for m in _SKIPPED_TEXT_RE.finditer(source, start, end)]
    skipped_starts = [s for s, _ in skipped]
    declarations: List[ComponentDeclaration] = []
    for m in _DEFINITION_RE.finditer(source, start, end):
        i = bisect.bisect_right(skipped_starts, m.start()) - 1
        if i >= 0 and m.start() < skipped[i][1]:
            continue
        try:
            tree = SCRIPT_GRAMMAR["object"].match(source, m.end())
            obj = builder.visit(tree)
        except (ParseError, VisitationError) as exc:
            _log.debug("%s: skipping unreadable component definition: %s",
                       index.loc(m.start()), exc)
            continue
        declarations.append(_to_declaration(obj))
    return declarations


# ═══════════════════════════════════════════════════════════════════
#  PART 4 — MARKUP VISITOR (Parse Tree → token stream)
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class _RawAttribute:
    name: str
    value: Optional[str]
    name_offset: int
    value_offset: int


@dataclass(frozen=True)
class _StartTag:
    raw_name: str
    attributes: Tuple[_RawAttribute, ...]
    self_closing: bool
    offset: int


@dataclass(frozen=True)
class _EndTag:
    raw_name: str
    offset: int


@dataclass(frozen=True)
class _RawBlock:
    raw_name: str
    attributes: Tuple[_RawAttribute, ...]
    body: str
    body_offset: int
    offset: int


class MarkupBuilder(NodeVisitor):
    """Flattens a ``MARKUP_GRAMMAR`` parse tree into a token list."""

    def __init__(self, index: _LineIndex) -> None:
        self._index = index

    def generic_visit(self, node, visited_children):
        return visited_children or node

    def visit_document(self, node, visited_children):
        return list(visited_children)

    def visit_token(self, node, visited_children):
        return visited_children[0]

    def visit_comment(self, node, visited_children):
        return Comment(text=node.match.group(1), loc=self._index.loc(node.start))

    def visit_raw_block(self, node, visited_children):
        return visited_children[0]

    def _raw_block(self, node, visited_children, raw_name):
        _, attributes, _, _, body, _ = visited_children
        return _RawBlock(
            raw_name=raw_name,
            attributes=tuple(attributes) if isinstance(attributes, list) else (),
            body=body.text,
            body_offset=body.start,
            offset=node.start,
        )

    def visit_script_block(self, node, visited_children):
        return self._raw_block(node, visited_children, "script")

    def visit_style_block(self, node, visited_children):
        return self._raw_block(node, visited_children, "style")

    def visit_start_tag(self, node, visited_children):
        _, raw_name, attributes, _, self_closing, _ = visited_children
        return _StartTag(
            raw_name=raw_name,
            attributes=tuple(attributes) if isinstance(attributes, list) else (),
            self_closing=self_closing,
            offset=node.start,
        )

    def visit_self_closing(self, node, visited_children):
        return node.text == "/"

    def visit_end_tag(self, node, visited_children):
        return _EndTag(raw_name=visited_children[1], offset=node.start)

    def visit_tag_name(self, node, visited_children):
        return node.text

    def visit_attribute(self, node, visited_children):
        _, name, assign = visited_children
        name_offset = node.children[1].start
        if isinstance(assign, list):
            value, value_offset = assign[0]
        else:
            value, value_offset = None, name_offset
        return _RawAttribute(name, value, name_offset, value_offset)

    def visit_attr_name(self, node, visited_children):
        return node.text

    def visit_attr_assign(self, node, visited_children):
        return visited_children[3]

    def visit_attr_value(self, node, visited_children):
        return visited_children[0]

    def visit_dq_value(self, node, visited_children):
        return (node.text[1:-1], node.start + 1)

    visit_sq_value = visit_dq_value

    def visit_unquoted_value(self, node, visited_children):
        return (node.text, node.start)

    def visit_mustache(self, node, visited_children):
        return Text(text=node.text, loc=self._index.loc(node.start))

    def visit_text(self, node, visited_children):
        return Text(text=node.text, loc=self._index.loc(node.start))


# ═══════════════════════════════════════════════════════════════════
#  PART 5 — TREE CONSTRUCTION
# ═══════════════════════════════════════════════════════════════════

_DIRECTIVE_SHORTHANDS = {":": "bind", ".": "bind", "@": "on", "#": "slot"}
_V_DIRECTIVE_RE = re.compile(r"v-([^:.]+)(.*)\Z", re.S)
_ARGUMENT_RE = re.compile(r"(\[[^\]]*\]|[^.]*)((?:\.[^.]*)*)\Z", re.S)
_SVG_HTML_INTEGRATION_POINTS = frozenset({"foreignObject", "desc", "title"})


def _split_argument(text: str) -> Tuple[Optional[str], Tuple[str, ...]]:
    m = _ARGUMENT_RE.match(text)
    if m is None:
        return None, ()
    argument = m.group(1)
    modifiers = tuple(part for part in m.group(2).split(".") if part)
    if not argument or argument.startswith("["):
        return None, modifiers
    return argument, modifiers


def _parse_directive_name(
    name: str,
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    """Split a directive attribute name into (directive, argument, modifiers)."""
    if name.startswith("v-"):
        m = _V_DIRECTIVE_RE.match(name)
        if m is None:
            return None
        directive, rest = m.group(1), m.group(2)
        if rest.startswith(":"):
            argument, modifiers = _split_argument(rest[1:])
        else:
            argument = None
            modifiers = tuple(part for part in rest.split(".") if part)
        return directive, argument, modifiers
    if len(name) > 1 and name[0] in _DIRECTIVE_SHORTHANDS:
        argument, modifiers = _split_argument(name[1:])
        if name[0] == ".":
            modifiers += ("prop",)
        return _DIRECTIVE_SHORTHANDS[name[0]], argument, modifiers
    return None


def _make_attribute(raw: _RawAttribute, index: _LineIndex) -> Attribute:
    loc = index.loc(raw.name_offset)
    value = html.unescape(raw.value) if raw.value is not None else None
    directive = _parse_directive_name(raw.name)
    if directive is None:
        return Attribute(kind=AttributeKind.STATIC, name=raw.name, loc=loc, value=value)
    name, argument, modifiers = directive
    expression = None
    if value is not None and value.strip():
        expression = parse_expression(value, index.loc(raw.value_offset))
    return Attribute(
        kind=AttributeKind.DIRECTIVE,
        name=raw.name,
        loc=loc,
        value=value,
        directive=name,
        argument=argument,
        modifiers=modifiers,
        expression=expression,
    )


def _child_namespace(parent: Optional[Element], raw_name: str) -> Namespace:
    if parent is not None and parent.namespace is Namespace.MATHML:
        return Namespace.MATHML
    if (
        parent is not None
        and parent.namespace is Namespace.SVG
        and parent.raw_name not in _SVG_HTML_INTEGRATION_POINTS
    ):
        return Namespace.SVG
    lowered = raw_name.lower()
    if lowered == "svg":
        return Namespace.SVG
    if lowered == "math":
        return Namespace.MATHML
    return Namespace.HTML


@dataclass
class _TreeResult:
    roots: List[Any] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)
    raw_blocks: List[_RawBlock] = field(default_factory=list)


def _build_tree(tokens: Sequence[Any], index: _LineIndex) -> _TreeResult:
    result = _TreeResult()
    stack: List[Element] = []

    def _append(node: Any) -> None:
        (stack[-1].children if stack else result.roots).append(node)

    for token in tokens:
        if isinstance(token, Comment):
            result.comments.append(token)
            _append(token)
        elif isinstance(token, Text):
            _append(token)
        elif isinstance(token, _StartTag):
            parent = stack[-1] if stack else None
            namespace = _child_namespace(parent, token.raw_name)
            name = token.raw_name.lower() if namespace is Namespace.HTML else token.raw_name
            element = Element(
                name=name,
                raw_name=token.raw_name,
                namespace=namespace,
                attributes=tuple(_make_attribute(a, index) for a in token.attributes),
                loc=index.loc(token.offset),
            )
            _append(element)
            void = namespace is Namespace.HTML and name in HTML_VOID_ELEMENT_NAMES
            if not token.self_closing and not void:
                stack.append(element)
        elif isinstance(token, _EndTag):
            wanted = token.raw_name.lower()
            for depth in range(len(stack) - 1, -1, -1):
                if stack[depth].raw_name.lower() == wanted:
                    del stack[depth:]
                    break
            else:
                _log.debug("%s: ignoring stray end tag </%s>",
                           index.loc(token.offset), token.raw_name)
        elif isinstance(token, _RawBlock):
            if stack:
                element = Element(
                    name=token.raw_name,
                    raw_name=token.raw_name,
                    namespace=stack[-1].namespace,
                    attributes=tuple(_make_attribute(a, index) for a in token.attributes),
                    children=[Text(text=token.body, loc=index.loc(token.body_offset))],
                    loc=index.loc(token.offset),
                )
                _append(element)
            else:
                result.raw_blocks.append(token)
        else:
            raise AssertionError(f"unexpected markup token: {token!r}")
    return result


# ═══════════════════════════════════════════════════════════════════
#  PART 6 — PUBLIC ENTRY POINTS
# ═══════════════════════════════════════════════════════════════════

def _find_template(roots: Sequence[Any]) -> Optional[Element]:
    for node in roots:
        if isinstance(node, Element) and node.name == "template":
            return node
    return None


def parse_template(source: str, path: str = "<template>") -> Optional[Element]:
    """Parse markup and return its first top-level ``<template>`` element."""
    index = _LineIndex(source, path)
    tokens = MarkupBuilder(index).visit(MARKUP_GRAMMAR.parse(source))
    return _find_template(_build_tree(tokens, index).roots)


def parse_sfc(source: str, path: str = "<sfc>") -> SfcDocument:
    """Parse the full text of a single-file component."""
    index = _LineIndex(source, path)
    tokens = MarkupBuilder(index).visit(MARKUP_GRAMMAR.parse(source))
    tree = _build_tree(tokens, index)

    template = _find_template(tree.roots)
    if template is not None:
        lang = template.get_attribute("lang")
        if lang is not None and lang.value not in (None, "", "html"):
            _log.debug("%s: template language %r is not markup; skipping template",
                       template.loc, lang.value)
            template = None

    declarations: List[ComponentDeclaration] = []
    for block in tree.raw_blocks:
        if block.raw_name != "script":
            continue
        declarations.extend(parse_component_declarations(
            source,
            start=block.body_offset,
            end=block.body_offset + len(block.body),
            index=index,
        ))

    _log.debug("%s: parsed %d component definition(s)", path, len(declarations))
    return SfcDocument(
        path=path,
        source=source,
        template=template,
        declarations=tuple(declarations),
        comments=tuple(tree.comments),
    )


def parse_file(path: Union[str, Path]) -> SfcDocument:
    """Read and parse a ``.vue`` file."""
    p = Path(path)
    try:
        source = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SfcReadError(f"cannot read {p}: {exc}") from exc
    return parse_sfc(source, path=str(p))


__all__ = [
    "MARKUP_GRAMMAR",
    "SCRIPT_GRAMMAR",
    "ObjectLiteral",
    "ArrayLiteral",
    "ScriptBuilder",
    "MarkupBuilder",
    "parse_expression",
    "parse_component_declarations",
    "parse_template",
    "parse_sfc",
    "parse_file",
]
