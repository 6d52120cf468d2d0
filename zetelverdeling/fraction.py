"""
Exact rational arithmetic for the seat assignment.

Every value which is ranked during the assignment (quota, remainders,
averages) is a ``fractions.Fraction``. Fractions compare by cross
multiplication of numerators and denominators, so no floating point value is
ever produced. Never mix these values with floats: a float operand silently
converts the result to a float.

For display and transport a fraction is split into a ``MixedNumber``, an
integer part and a proper fraction.
"""

import fractions
from collections import namedtuple

Fraction = fractions.Fraction

ZERO = Fraction(0)

# MixedNumber: integer + numerator/denominator, 0 <= numerator < denominator
MixedNumber = namedtuple("MixedNumber", ("integer", "numerator", "denominator"))


def _check_natural(value, name):
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError("%s must be a natural number, got %r" % (name, value))


def from_ratio(numerator, denominator=1):
    """
    numerator: natural number
    denominator: positive natural number
    """
    _check_natural(numerator, "numerator")
    _check_natural(denominator, "denominator")
    if denominator == 0:
        raise ValueError("denominator must be positive")
    return Fraction(numerator, denominator)


def add(a, b):
    return a + b


def subtract(a, b):
    "a - b, where the result must not be negative"
    result = a - b
    if result < 0:
        raise ValueError("fraction underflow: %s - %s" % (a, b))
    return result


def compare(a, b):
    "returns -1, 0 or 1 as `a' is less than, equal to or greater than `b'"
    lhs = a.numerator * b.denominator
    rhs = b.numerator * a.denominator
    return (lhs > rhs) - (lhs < rhs)


def to_mixed_number(value):
    # Fraction keeps itself reduced by the gcd, so the proper part is too
    integer, numerator = divmod(value.numerator, value.denominator)
    return MixedNumber(integer, numerator, value.denominator)


def from_mixed_number(mixed):
    return Fraction(mixed.integer * mixed.denominator + mixed.numerator, mixed.denominator)


def fraction_json(value):
    return dict(to_mixed_number(value)._asdict())


def display(value):
    "render as an integer, a proper fraction, or a mixed number eg. `340 4/15'"
    mixed = to_mixed_number(value)
    if mixed.numerator == 0:
        return "%d" % (mixed.integer)
    if mixed.integer == 0:
        return "%d/%d" % (mixed.numerator, mixed.denominator)
    return "%d %d/%d" % mixed
