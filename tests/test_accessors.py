from __future__ import annotations

import pytest

from ini_reader.accessors import (
    get,
    get_bool,
    get_float,
    get_int,
    has_option,
    has_section,
    options,
    sections,
)
from ini_reader.containers import set_map_implementation
from ini_reader.exceptions import ConversionError
from ini_reader.parser import parse_string

SAMPLE = """\
[first_section]
boring = value
[second_section]
one = for the money
two = for the show
three = to get ready
[numbers]
count = 42
ratio = 3.14159265359
enabled = Yes
disabled = off
broken = maybe
flag
[empty]
"""


@pytest.fixture()
def document():
    return parse_string(SAMPLE)


def test_sections_lists_every_section(document):
    assert sorted(sections(document)) == ["empty", "first_section", "numbers", "second_section"]


def test_sections_follow_first_seen_order_with_ordered_maps():
    set_map_implementation("ordered")
    document = parse_string("[zeta]\n[alpha]\n[zeta]\n[mid]\n")

    assert sections(document) == ["zeta", "alpha", "mid"]


def test_has_section(document):
    assert has_section(document, "first_section") is True
    assert has_section(document, "snarfblat") is False


def test_options_lists_keys(document):
    assert sorted(options(document, "second_section")) == ["one", "three", "two"]


def test_options_distinguishes_missing_from_empty(document):
    assert options(document, "empty") == []
    assert options(document, "non-existent section") is None


def test_has_option(document):
    assert has_option(document, "second_section", "one") is True
    assert has_option(document, "second_section", "florp") is False
    assert has_option(document, "missing", "one") is False


def test_get_returns_value(document):
    assert get(document, "second_section", "one") == "for the money"


def test_get_returns_none_for_missing_section(document):
    assert get(document, "non-existent", "one") is None


def test_get_returns_none_for_lone_key(document):
    assert get(document, "numbers", "flag", fallback="unused") is None


def test_get_prefers_vars(document):
    assert get(document, "second_section", "one", vars={"one": "is the loneliest number"}) == (
        "is the loneliest number"
    )


def test_get_returns_none_override_verbatim(document):
    assert get(document, "second_section", "one", vars={"one": None}) is None


def test_get_ignores_vars_without_key(document):
    assert get(document, "second_section", "one", vars={"two": "x"}) == "for the money"


def test_get_uses_fallback(document):
    assert get(document, "non-existent", "_", fallback="None") == "None"
    assert get(document, "second_section", "non-existent", fallback="None") == "None"


def test_get_int(document):
    assert get_int(document, "numbers", "count") == 42
    assert get_int(document, "numbers", "missing") is None
    assert get_int(document, "numbers", "missing", fallback="7") == 7
    assert get_int(document, "numbers", "count", vars={"count": "9"}) == 9


def test_get_float(document):
    assert get_float(document, "numbers", "ratio") == pytest.approx(3.14159265359)
    assert get_float(document, "numbers", "count") == 42.0


@pytest.mark.parametrize(
    ("key", "expected"),
    [("enabled", True), ("disabled", False)],
)
def test_get_bool(document, key: str, expected: bool):
    assert get_bool(document, "numbers", key) is expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("true", True),
        ("1", True),
        ("YES", True),
        ("On", True),
        ("FALSE", False),
        ("0", False),
        ("no", False),
        ("Off", False),
    ],
)
def test_get_bool_accepts_case_insensitive_words(text: str, expected: bool):
    assert get_bool({}, "s", "k", fallback=text) is expected


@pytest.mark.parametrize(
    ("getter", "key", "target"),
    [
        (get_int, "ratio", "int"),
        (get_float, "broken", "float"),
        (get_bool, "broken", "bool"),
    ],
)
def test_typed_getters_raise_conversion_error(document, getter, key: str, target: str):
    with pytest.raises(ConversionError) as excinfo:
        getter(document, "numbers", key)

    assert excinfo.value.target == target
    assert excinfo.value.key == key
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize("text", ["1_000", "١٢", "0x1f", "4 2", "+"])
def test_get_int_accepts_only_ascii_decimal_digits(text: str):
    with pytest.raises(ConversionError) as excinfo:
        get_int({}, "s", "k", fallback=text)

    assert excinfo.value.value == text


@pytest.mark.parametrize(("text", "expected"), [("-17", -17), ("+3", 3), (" 0042 ", 42)])
def test_get_int_accepts_signed_literals(text: str, expected: int):
    assert get_int({}, "s", "k", fallback=text) == expected
