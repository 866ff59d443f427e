import math

import pytest

from lox.types import (
    NAN, NIL, UNINITIALIZED, is_truthy, normalize, number_operand, to_string, type_name,
    values_equal,
)

VALUES = [0.0, 1.5, -2.0, '', 'text', True, False, NIL, NAN, UNINITIALIZED]


@pytest.mark.parametrize('value', VALUES)
def test_equality_is_reflexive(value):
    assert values_equal(value, value)


def test_equality_is_symmetric():
    for a in VALUES:
        for b in VALUES:
            assert values_equal(a, b) == values_equal(b, a)


def test_different_tags_never_equal():
    assert not values_equal(1.0, True)
    assert not values_equal(0.0, False)
    assert not values_equal(NIL, False)
    assert not values_equal(NAN, math.nan)
    assert not values_equal(UNINITIALIZED, NIL)


@pytest.mark.parametrize('value, text', [
    (3.0, '3'), (-0.0, '-0'), (2.5, '2.5'), (1e21, '1000000000000000000000'), (1e-05, '0.00001'),
    (float('inf'), 'inf'), ('s', 's'),
    (True, 'true'), (False, 'false'), (NIL, 'nil'), (NAN, 'Nan'),
])
def test_to_string(value, text):
    assert to_string(value) == text


def test_uninitialized_is_not_printable():
    with pytest.raises(TypeError):
        to_string(UNINITIALIZED)


def test_truthiness():
    assert not is_truthy(NIL)
    assert not is_truthy(False)
    for value in (True, 0.0, '', NAN, UNINITIALIZED):
        assert is_truthy(value)


def test_number_operand():
    assert number_operand(2.0) == 2.0
    assert math.isnan(number_operand(NAN))
    for value in (True, 'x', NIL, UNINITIALIZED):
        with pytest.raises(TypeError):
            number_operand(value)


def test_normalize():
    assert normalize(math.nan) is NAN
    assert normalize(1.0) == 1.0
    assert normalize('x') == 'x'


def test_type_name():
    assert [type_name(v) for v in (1.0, 's', True, NIL, NAN, UNINITIALIZED)] == [
        'Number', 'Str', 'Boolean', 'Nil', 'NaN', 'Uninitialized',
    ]
