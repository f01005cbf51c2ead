from __future__ import annotations

import pytest

from hi_common.config import parse_bool_env, parse_float_env, parse_int_env

pytestmark = pytest.mark.unit_common


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, None), ("1", True), (" Yes ", True), ("on", True), ("0", False), ("nope", False)],
)
def test_parse_bool_env(raw, expected) -> None:
    assert parse_bool_env(raw) is expected


def test_parse_numbers() -> None:
    assert parse_int_env("465") == 465
    assert parse_int_env("4.5") is None
    assert parse_int_env(None) is None
    assert parse_float_env("2.5") == 2.5
    assert parse_float_env("soon") is None
