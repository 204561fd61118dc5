"""Domain Types — discriminator formatting and tag composition.

Tests:
    - Discriminators are zero-padded to 4 digits
    - Values outside 1..9999 are rejected
    - Tags join username and discriminator with '#'
"""

import pytest

from union.core.domain_types import (
    DISCRIMINATOR_MAX, DISCRIMINATOR_MIN, format_discriminator, format_tag,
)


@pytest.mark.parametrize(
    "value, expected",
    [(1, "0001"), (42, "0042"), (999, "0999"), (9999, "9999")],
)
def test_format_discriminator_pads_to_four_digits(value, expected):
    assert format_discriminator(value) == expected


@pytest.mark.parametrize("value", [0, -1, 10000])
def test_format_discriminator_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        format_discriminator(value)


def test_namespace_bounds():
    assert DISCRIMINATOR_MIN == 1
    assert DISCRIMINATOR_MAX == 9999


def test_format_tag():
    assert format_tag("alice", "0042") == "alice#0042"
