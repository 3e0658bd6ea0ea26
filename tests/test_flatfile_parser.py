import io
import json
from dataclasses import dataclass
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from wp_struct.errors import InvalidFormatError, SourceReadError, WPStructError
from wp_struct.flatfile import FlatFileParser, TypeNameResolver, load_record
from wp_struct.mapping import populate
from wp_struct.records import CustomField, Post, Term
from wp_struct.registry import RecordRegistry


_POST_TEXT = """\
post_title: Hello
  World
post_content: body text
custom_fields: [{"key":"a","value":"1"},{"key":"b","value":"2"}]
ping_status: null
"""


@pytest.fixture
def parser() -> FlatFileParser:
    return FlatFileParser()


def test_end_to_end_post_file(parser: FlatFileParser) -> None:
    result = parser.parse_string(_POST_TEXT)

    assert result.ok
    assert result.struct == {
        "post_title": "HelloWorld",
        "post_content": "body text",
        "custom_fields": [{"key": "a", "value": "1"}, {"key": "b", "value": "2"}],
    }
    assert "ping_status" not in result.struct

    post = Post()
    assert populate(result.struct, post) == []
    assert post.custom_fields == [CustomField(key="a", value="1"), CustomField(key="b", value="2")]
    assert post.ping_status is None


def test_continuation_appends_without_separator(parser: FlatFileParser) -> None:
    assert parser.parse_string("k: ab\ncd").struct == {"k": "abcd"}


def test_value_keeps_text_after_first_colon(parser: FlatFileParser) -> None:
    assert parser.parse_string("link: http://example.com:8080/a").struct == {"link": "http://example.com:8080/a"}


def test_comments_and_blank_lines_are_ignored(parser: FlatFileParser) -> None:
    text = "# leading comment\n\nk: ab\n# between\n\ncd\n"
    assert parser.parse_string(text).struct == {"k": "abcd"}


def test_only_comments_yields_empty_struct(parser: FlatFileParser) -> None:
    result = parser.parse_string("# anything\n\n")
    assert len(result.struct) == 0
    assert result.ok


def test_leading_continuation_is_invalid_format(parser: FlatFileParser) -> None:
    with pytest.raises(InvalidFormatError, match="line 2: continuation line before any key") as exc_info:
        _ = parser.parse_string("# comment\nno key here\nk: v\n")
    assert exc_info.value.line_number == 2


def test_invalid_format_is_a_value_error(parser: FlatFileParser) -> None:
    with pytest.raises(ValueError):
        _ = parser.parse_string("-dash: not a key\n")


@pytest.mark.parametrize("literal", ["null", "NULL", "Null", "  null  "])
def test_null_values_are_dropped(parser: FlatFileParser, literal: str) -> None:
    assert "key" not in parser.parse_string(f"key:{literal}\nother: x\n").struct


def test_repeated_key_keeps_last_value(parser: FlatFileParser) -> None:
    result = parser.parse_string("k: first\nother: x\nk: second\n")
    assert result.struct == {"k": "second", "other": "x"}
    assert list(result.struct) == ["k", "other"]


def test_repeated_key_with_null_keeps_earlier_value(parser: FlatFileParser) -> None:
    assert parser.parse_string("k: first\nk: null\n").struct == {"k": "first"}


def test_json_array_of_strings(parser: FlatFileParser) -> None:
    assert parser.parse_string('tags: ["x","y"]').struct == {"tags": ["x", "y"]}


def test_empty_json_array_is_dropped(parser: FlatFileParser) -> None:
    result = parser.parse_string("tags: []\n")
    assert "tags" not in result.struct
    assert result.ok


def test_json_array_spanning_continuation_lines(parser: FlatFileParser) -> None:
    text = 'terms: [{"name": "a"},\n  {"name": "b"}]\n'
    assert parser.parse_string(text).struct == {"terms": [{"name": "a"}, {"name": "b"}]}


def test_json_array_of_objects_resolves_record_type(parser: FlatFileParser) -> None:
    result = parser.parse_string('terms: [{"name":"a","count":"3"}]')
    assert result.struct == {"terms": [{"name": "a", "count": 3}]}

    post = Post()
    assert populate(result.struct, post) == []
    assert post.terms == [Term(name="a", count=3)]


def test_json_object_nulls_are_treated_as_absent(parser: FlatFileParser) -> None:
    result = parser.parse_string('terms: [{"name":"a","slug":null}]')
    assert result.struct == {"terms": [{"name": "a"}]}


def test_unresolvable_list_key_is_skipped_with_diagnostic(parser: FlatFileParser) -> None:
    with capture_logs() as logs:
        result = parser.parse_string('widgets: [{"name":"a"}]\nk: v\n')

    assert result.struct == {"k": "v"}
    assert not result.ok
    (diagnostic,) = result.diagnostics
    assert diagnostic.key == "widgets"
    assert diagnostic.line == 1
    assert "Widget" in diagnostic.message
    assert logs[0]["event"] == "key skipped"
    assert logs[0]["key"] == "widgets"


@pytest.mark.parametrize(
    "value",
    [
        '[{"name": "a"',
        '[{"name": "a"}, "b"]',
        '[{"name": "a"}, {"count": "many"}]',
        "[1, 2]",
    ],
)
def test_malformed_list_skips_only_that_key(parser: FlatFileParser, value: str) -> None:
    result = parser.parse_string(f"post_title: kept\nterms: {value}\npost_content: also kept\n")
    assert result.struct == {"post_title": "kept", "post_content": "also kept"}
    assert [d.key for d in result.diagnostics] == ["terms"]
    assert result.diagnostics[0].line == 2


def test_raise_for_diagnostics(parser: FlatFileParser) -> None:
    result = parser.parse_string("widgets: [{}]\n")
    with pytest.raises(WPStructError, match="1 key\\(s\\) skipped: widgets \\(line 1\\)"):
        result.raise_for_diagnostics()

    parser.parse_string("k: v").raise_for_diagnostics()


def test_plain_values_stay_strings(parser: FlatFileParser) -> None:
    result = parser.parse_string("post_id: 12\nsticky: true\n")
    assert result.struct == {"post_id": "12", "sticky": "true"}


def test_custom_resolver_registry() -> None:
    registry = RecordRegistry()
    _ = registry.register(Term)
    parser = FlatFileParser(resolver=TypeNameResolver(registry))

    result = parser.parse_string('terms: [{"name":"a"}]\ncustom_fields: [{"key":"k"}]\n')

    assert result.struct == {"terms": [{"name": "a"}]}
    assert [d.key for d in result.diagnostics] == ["custom_fields"]


def test_custom_json_decoder_is_used() -> None:
    calls: list[str] = []

    def decoder(text: str) -> object:
        calls.append(text)
        return json.loads(text)

    parser = FlatFileParser(json_decoder=decoder)
    assert parser.parse_string('tags: ["a"]\n').struct == {"tags": ["a"]}
    assert calls == ['["a"]']


def test_parse_stream_handles_crlf_lines(parser: FlatFileParser) -> None:
    stream = io.StringIO("k: a\r\nb\r\nother: c\r\n", newline="")
    assert parser.parse_stream(stream).struct == {"k": "ab", "other": "c"}


def test_parse_file_and_load_record(tmp_path: Path, parser: FlatFileParser) -> None:
    path = tmp_path / "post.txt"
    _ = path.write_text(_POST_TEXT + "post_id: 42\nsticky: false\n", encoding="utf-8")

    assert parser.parse_file(path).struct["post_title"] == "HelloWorld"

    post = load_record(path, Post)
    assert post.post_id == 42
    assert post.sticky is False
    assert post.post_title == "HelloWorld"

    assert Post.from_file(path) == post


def test_parse_file_missing_source_raises_source_read_error(tmp_path: Path, parser: FlatFileParser) -> None:
    with pytest.raises(SourceReadError, match="cannot read"):
        _ = parser.parse_file(tmp_path / "missing.txt")


def test_parse_file_invalid_format_propagates(tmp_path: Path, parser: FlatFileParser) -> None:
    path = tmp_path / "bad.txt"
    _ = path.write_text("orphan line\n", encoding="utf-8")
    with pytest.raises(InvalidFormatError):
        _ = parser.parse_file(path)


def test_record_type_that_cannot_be_built_is_skipped() -> None:
    @dataclass
    class Widget:
        name: str

    registry = RecordRegistry()
    _ = registry.register(Widget)
    parser = FlatFileParser(resolver=TypeNameResolver(registry))

    result = parser.parse_string('widgets: [{"name":"a"}]\nk: v\n')

    assert result.struct == {"k": "v"}
    (diagnostic,) = result.diagnostics
    assert diagnostic.key == "widgets"
    assert "cannot build Widget" in diagnostic.message


def test_record_type_with_unsupported_fields_is_skipped() -> None:
    @dataclass
    class Gauge:
        ratio: float | None = None

    registry = RecordRegistry()
    _ = registry.register(Gauge)
    parser = FlatFileParser(resolver=TypeNameResolver(registry))

    result = parser.parse_string('gauges: [{"ratio":"a"}]\nk: v\n')

    assert result.struct == {"k": "v"}
    assert [d.key for d in result.diagnostics] == ["gauges"]


def test_deeply_nested_json_skips_only_that_key(parser: FlatFileParser) -> None:
    result = parser.parse_string("terms: " + "[" * 100_000 + "\nk: v\n")

    assert result.struct == {"k": "v"}
    assert [d.key for d in result.diagnostics] == ["terms"]


def test_parse_file_releases_handle_on_invalid_format(
    tmp_path: Path, parser: FlatFileParser, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "bad.txt"
    _ = path.write_text("# header\norphan line\nk: v\n", encoding="utf-8")
    opened: list[io.TextIOBase] = []
    original_open = Path.open

    def tracking_open(self: Path, *args: object, **kwargs: object) -> io.TextIOBase:
        stream = original_open(self, *args, **kwargs)
        opened.append(stream)
        return stream

    monkeypatch.setattr(Path, "open", tracking_open)

    with pytest.raises(InvalidFormatError):
        _ = parser.parse_file(path)

    (stream,) = opened
    assert stream.closed


def test_parse_file_invalid_utf8_raises_source_read_error(tmp_path: Path, parser: FlatFileParser) -> None:
    path = tmp_path / "latin1.txt"
    _ = path.write_bytes(b"post_title: caf\xe9\n")

    with pytest.raises(SourceReadError, match="cannot read") as exc_info:
        _ = parser.parse_file(path)
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
