"""
sfclint/casing.py — identifier casing conversions.

Component names are written in several conventions (``my-widget``,
``MyWidget``, ``myWidget``, ``my_widget``).  Usages and registrations are
compared by their kebab-case form; ignore patterns are tested against every
form.

>>> kebab_case("MyWidget")
'my-widget'
>>> pascal_case("my-widget")
'MyWidget'
>>> camel_case("my_widget")
'myWidget'
>>> snake_case("myWidget")
'my_widget'
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable, Dict, Tuple

_SYMBOLS_RE = re.compile(r"[!\"#%&'()*+,./:;<=>?@\[\\\]^`{|}]")
_INNER_UPPER_RE = re.compile(r"\B([A-Z])")
_SEPARATED_CHAR_RE = re.compile(r"[-_](\w)")
_SEPARATOR_RE = re.compile(r"-|_|\s")


class CasingForm(Enum):
    KEBAB = "kebab-case"
    PASCAL = "PascalCase"
    CAMEL = "camelCase"
    SNAKE = "snake_case"


def is_pascal_case(name: str) -> bool:
    """True when ``name`` has no symbols, no separators and no leading lower-case letter."""
    if _SYMBOLS_RE.search(name) or re.match(r"[a-z]", name) or _SEPARATOR_RE.search(name):
        return False
    return True


def kebab_case(name: str) -> str:
    return _INNER_UPPER_RE.sub(r"-\1", name.replace("_", "-")).lower()


def snake_case(name: str) -> str:
    return _INNER_UPPER_RE.sub(r"_\1", name).replace("-", "_").lower()


def camel_case(name: str) -> str:
    if is_pascal_case(name):
        return name[:1].lower() + name[1:]
    return _SEPARATED_CHAR_RE.sub(lambda m: m.group(1).upper(), name)


def pascal_case(name: str) -> str:
    camel = camel_case(name)
    return camel[:1].upper() + camel[1:]


_CONVERTERS: Dict[CasingForm, Callable[[str], str]] = {
    CasingForm.KEBAB: kebab_case,
    CasingForm.PASCAL: pascal_case,
    CasingForm.CAMEL: camel_case,
    CasingForm.SNAKE: snake_case,
}


def normalize(identifier: str, form: CasingForm) -> str:
    """Convert ``identifier`` to the given casing ``form``."""
    return _CONVERTERS[form](identifier)


def casing_variants(name: str) -> Tuple[str, ...]:
    """The raw name followed by its kebab, pascal, camel and snake forms."""
    return (name,) + tuple(convert(name) for convert in _CONVERTERS.values())


__all__ = [
    "CasingForm",
    "is_pascal_case",
    "kebab_case",
    "snake_case",
    "camel_case",
    "pascal_case",
    "normalize",
    "casing_variants",
]
