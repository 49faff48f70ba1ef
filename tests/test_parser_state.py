from ini_reader.accumulator import append_continuation, begin_section, define_config, fail
from ini_reader.config import JoinStyle, ParserOptions
from ini_reader.models import Failure, Ok, ParseState
from ini_reader.parser import (
    _try_colon_definition,
    _try_equals_definition,
    _try_lone_key,
    _try_section,
    _try_skip,
    is_skippable,
    leading_whitespace_columns,
    parse_line,
    strip_inline_comments,
)


def test_begin_section_creates_empty_table():
    state = begin_section(ParseState(), " general ")

    assert state.current_section == "general"
    assert state.result == Ok({"general": {}})
    assert state.continuation is False
    assert state.last_key is None


def test_begin_section_reuses_existing_table():
    state = define_config(begin_section(ParseState(), "s"), "a", "1")

    reopened = begin_section(state, "s")

    assert reopened.result.document == {"s": {"a": "1"}}
    assert reopened.continuation is False
    assert reopened.last_key is None


def test_begin_section_without_overwrite_numbers_every_header():
    state = ParseState(options=ParserOptions(overwrite_sections=False))

    state = begin_section(state, "s")
    state = begin_section(state, "s")
    state = begin_section(state, "t")

    assert list(state.result.document) == ["000_s", "001_s", "002_t"]
    assert state.current_section == "002_t"


def test_define_config_requires_section():
    state = define_config(ParseState(line_number=4), "key", "value")

    assert state.failed
    assert state.result == Failure(
        message=(
            "A configuration section must be defined before defining "
            "configuration values in line 4"
        ),
        line_number=4,
    )


def test_define_config_trims_key_and_value():
    state = define_config(begin_section(ParseState(), "s"), "  key ", "  some value \n")

    assert state.result.document == {"s": {"key": "some value"}}
    assert state.continuation is True
    assert state.last_key == "key"


def test_define_config_stores_none_for_lone_key():
    state = define_config(begin_section(ParseState(), "s"), "flag", None)

    assert state.result.document == {"s": {"flag": None}}


def test_append_continuation_uses_configured_separator():
    for style, expected in ((JoinStyle.WITH_NEWLINE, "a\nb"), (JoinStyle.WITH_SPACE, "a b")):
        state = ParseState(options=ParserOptions(join_continuations=style))
        state = define_config(begin_section(state, "s"), "k", "a")

        state = append_continuation(state, "  b  ")

        assert state.result.document == {"s": {"k": expected}}
        assert state.last_key == "k"
        assert state.continuation is True


def test_append_continuation_renders_none_as_empty():
    state = define_config(begin_section(ParseState(), "s"), "k", None)

    state = append_continuation(state, "value")

    assert state.result.document == {"s": {"k": "value"}}


def test_fail_is_sticky():
    failed = fail(ParseState(line_number=2), "first")

    assert fail(failed, "second").result == Failure(message="first", line_number=2)


def test_parse_line_passes_failed_state_through():
    failed = fail(ParseState(), "boom")

    assert parse_line(failed, "[section]\n") is failed


def test_parse_line_advances_line_number_on_every_branch():
    state = ParseState()
    for line in ["# comment\n", "\n", "[s]\n", "a = 1\n", "   more\n", "b: 2\n", "lone\n"]:
        next_state = parse_line(state, line)
        assert next_state.line_number == state.line_number + 1
        state = next_state

    assert state.result.document == {"s": {"a": "1\nmore", "b": "2", "lone": None}}


def test_parse_line_keeps_last_indent_on_continuation():
    state = parse_line(parse_line(ParseState(), "[s]\n"), "  key = a\n")
    assert state.last_indent == 2

    state = parse_line(state, "      b\n")

    assert state.last_indent == 2
    assert state.continuation is True


def test_parse_line_lone_key_disables_continuation():
    state = parse_line(parse_line(ParseState(), "[s]\n"), "flag\n")

    assert state.continuation is False
    assert state.last_key == "flag"


def test_strip_inline_comments():
    assert strip_inline_comments("key = value ; note\n") == "key = value "
    assert strip_inline_comments("; all comment") == ""
    assert strip_inline_comments("no comment") == "no comment"


def test_leading_whitespace_columns_counts_tabs_as_two():
    assert leading_whitespace_columns("value") == 0
    assert leading_whitespace_columns("    value") == 4
    assert leading_whitespace_columns("\tvalue") == 2
    assert leading_whitespace_columns("\t  value") == 4


def test_is_skippable():
    assert is_skippable("")
    assert is_skippable("   \n")
    assert is_skippable("  # comment")
    assert is_skippable("; comment")
    assert not is_skippable("key = value")


def test_classifiers_decline_non_matching_lines():
    state = begin_section(ParseState(), "s")

    assert _try_skip(state, "key = value") is None
    assert _try_section(state, "key = value") is None
    assert _try_equals_definition(state, "key: value") is None
    assert _try_colon_definition(state, "key") is None
    assert _try_lone_key(state, "   ") is None


def test_section_classifier_matches_anywhere_in_line():
    state = _try_section(ParseState(), "  text [inner] more")

    assert state.current_section == "inner"
