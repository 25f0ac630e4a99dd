"""
sfclint/registration.py — names a component definition registers.

Names are returned exactly as written in the declaration; casing is
normalised later, for usages and registrations alike.
"""

from __future__ import annotations

from typing import List

from sfclint.template_ast import ComponentDeclaration


def extract_registered_names(declaration: ComponentDeclaration) -> List[str]:
    """
    Raw names of every sub-component the declaration makes visible.

    Covers the declaration's own ``components`` entries plus those merged
    in from inline ``mixins`` objects and an inline ``extends`` object.
    """
    names = [component.name for component in declaration.components]
    for mixin in declaration.mixins:
        names.extend(extract_registered_names(mixin))
    if declaration.extends is not None:
        names.extend(extract_registered_names(declaration.extends))
    return names


__all__ = ["extract_registered_names"]
