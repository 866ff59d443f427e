"""Runtime values for Lox.

A Lox value (``LiteralVal``) is one of:

* ``float`` for numbers,
* ``str`` for strings,
* ``bool`` for booleans,
* :data:`NIL`, the explicit absence of a value,
* :data:`NAN`, a comparable not-a-number marker,
* :data:`UNINITIALIZED`, the contents of a variable that was declared
  without an initializer.

The helpers in this module implement the value rules the interpreter
relies on: display, truthiness, equality and numeric coercion. Helpers that
can fail raise a plain ``TypeError``; the interpreter catches it and raises
the matching Lox runtime error with the offending token attached.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Union


class NilVal:
    """Marker object for the Lox ``nil`` value."""
    def __eq__(self, other: Any) -> bool:
        return isinstance(other, NilVal)

    def __hash__(self) -> int:
        return hash(NilVal)

    def __repr__(self) -> str:
        return 'nil'


class NaNVal:
    """Marker for a not-a-number result.

    Unlike an IEEE NaN, this marker is equal to itself, so ``==`` and
    ``!=`` treat it as an ordinary value.
    """
    def __eq__(self, other: Any) -> bool:
        return isinstance(other, NaNVal)

    def __hash__(self) -> int:
        return hash(NaNVal)

    def __repr__(self) -> str:
        return 'NaN'


class UninitializedVal:
    """Marker stored in a variable declared without an initializer."""
    def __eq__(self, other: Any) -> bool:
        return isinstance(other, UninitializedVal)

    def __hash__(self) -> int:
        return hash(UninitializedVal)

    def __repr__(self) -> str:
        return 'uninitialized'


NIL = NilVal()
NAN = NaNVal()
UNINITIALIZED = UninitializedVal()

LiteralVal = Union[float, str, bool, NilVal, NaNVal, UninitializedVal]


def type_name(value: Any) -> str:
    """Return the Lox type name of a runtime value."""
    # bool before float: the tags never overlap in Lox
    if isinstance(value, bool):
        return 'Boolean'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, str):
        return 'Str'
    if isinstance(value, NilVal):
        return 'Nil'
    if isinstance(value, NaNVal):
        return 'NaN'
    if isinstance(value, UninitializedVal):
        return 'Uninitialized'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Convert a Lox value to the text written by ``print``.

    Numbers are written in positional notation with the shortest digits
    that round-trip, and integral numbers lose their trailing ``.0``.
    Raises ``TypeError`` for an uninitialized value, which has no printable
    form.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        text = repr(value)
        if math.isfinite(value):
            text = format(Decimal(text), 'f')
        if text.endswith('.0'):
            text = text[:-2]
        return text
    if isinstance(value, str):
        return value
    if isinstance(value, NilVal):
        return 'nil'
    if isinstance(value, NaNVal):
        return 'Nan'
    if isinstance(value, UninitializedVal):
        raise TypeError('uninitialized value is not printable')
    raise TypeError(f"unknown value {value!r}")


def is_truthy(value: Any) -> bool:
    """Only ``nil`` and ``false`` are falsy."""
    if isinstance(value, NilVal):
        return False
    if isinstance(value, bool):
        return value
    return True


def values_equal(a: Any, b: Any) -> bool:
    """Equality by tag, then by value.

    Values of different tags are never equal (``true`` is not ``1``), and
    the NaN marker is equal to itself.
    """
    if type_name(a) != type_name(b):
        return False
    return a == b


def number_operand(value: Any) -> float:
    """Coerce an operand of an arithmetic or ordering operator to a float.

    The NaN marker becomes an IEEE NaN, so every ordering comparison
    involving it is false. Raises ``TypeError`` for anything that is not a
    number.
    """
    if isinstance(value, bool):
        raise TypeError(f"expected Number, got {type_name(value)}")
    if isinstance(value, float):
        return value
    if isinstance(value, NaNVal):
        return math.nan
    raise TypeError(f"expected Number, got {type_name(value)}")


def normalize(value: Any) -> Any:
    """Re-tag an IEEE NaN float as the NaN marker."""
    if isinstance(value, float) and math.isnan(value):
        return NAN
    return value
