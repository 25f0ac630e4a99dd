"""
sfclint/elements.py — well-known element vocabularies.

Names are compared case-sensitively against the raw tag name, so
``<Div>`` is not treated as the HTML ``div`` element.
"""

from __future__ import annotations

from typing import FrozenSet

HTML_ELEMENT_NAMES: FrozenSet[str] = frozenset({
    "html", "body", "base", "head", "link", "meta", "style", "title",
    "address", "article", "aside", "footer", "header", "h1", "h2", "h3",
    "h4", "h5", "h6", "hgroup", "nav", "section", "div", "dd", "dl", "dt",
    "figcaption", "figure", "hr", "img", "li", "main", "ol", "p", "pre",
    "ul", "a", "b", "abbr", "bdi", "bdo", "br", "cite", "code", "data",
    "dfn", "em", "i", "kbd", "mark", "q", "rp", "rt", "rtc", "ruby", "s",
    "samp", "small", "span", "strong", "sub", "sup", "time", "u", "var",
    "wbr", "area", "audio", "map", "track", "video", "embed", "object",
    "param", "source", "canvas", "script", "noscript", "del", "ins",
    "caption", "col", "colgroup", "table", "thead", "tbody", "tfoot", "td",
    "th", "tr", "button", "datalist", "fieldset", "form", "input", "label",
    "legend", "meter", "optgroup", "option", "output", "progress", "select",
    "textarea", "details", "dialog", "menu", "menuitem", "summary",
    "content", "element", "shadow", "template", "slot", "blockquote",
    "iframe", "noframes", "picture", "search",
})

SVG_ELEMENT_NAMES: FrozenSet[str] = frozenset({
    "a", "animate", "animateMotion", "animateTransform", "audio", "canvas",
    "circle", "clipPath", "defs", "desc", "discard", "ellipse", "feBlend",
    "feColorMatrix", "feComponentTransfer", "feComposite",
    "feConvolveMatrix", "feDiffuseLighting", "feDisplacementMap",
    "feDistantLight", "feDropShadow", "feFlood", "feFuncA", "feFuncB",
    "feFuncG", "feFuncR", "feGaussianBlur", "feImage", "feMerge",
    "feMergeNode", "feMorphology", "feOffset", "fePointLight",
    "feSpecularLighting", "feSpotLight", "feTile", "feTurbulence", "filter",
    "foreignObject", "g", "iframe", "image", "line", "linearGradient",
    "marker", "mask", "metadata", "mpath", "path", "pattern", "polygon",
    "polyline", "radialGradient", "rect", "script", "set", "stop", "style",
    "svg", "switch", "symbol", "text", "textPath", "title", "tspan",
    "unknown", "use", "video", "view",
})

# Elements provided by the framework itself; they never need registering.
BUILTIN_COMPONENT_NAMES: FrozenSet[str] = frozenset({
    "component",
    "suspense",
    "teleport",
    "transition",
    "transition-group",
    "keep-alive",
})

# Void elements never have an end tag.
HTML_VOID_ELEMENT_NAMES: FrozenSet[str] = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input", "link",
    "meta", "param", "source", "track", "wbr",
})


def is_html_well_known_element_name(name: str) -> bool:
    return name in HTML_ELEMENT_NAMES


def is_svg_well_known_element_name(name: str) -> bool:
    return name in SVG_ELEMENT_NAMES


def is_builtin_component_name(name: str) -> bool:
    return name in BUILTIN_COMPONENT_NAMES


__all__ = [
    "HTML_ELEMENT_NAMES",
    "SVG_ELEMENT_NAMES",
    "BUILTIN_COMPONENT_NAMES",
    "HTML_VOID_ELEMENT_NAMES",
    "is_html_well_known_element_name",
    "is_svg_well_known_element_name",
    "is_builtin_component_name",
]
