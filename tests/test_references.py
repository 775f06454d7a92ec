"""Tests for the reference scanner."""

import pytest

from textcon.exceptions import TemplateParseError
from textcon.references import TemplateReference, compile_reference_pattern, find_references, iter_references


def test_single_reference_offsets():
    text = "Start {{ @file.txt }} end"
    (ref,) = find_references(text)
    assert ref == TemplateReference("{{ @file.txt }}", "@file.txt", 6, 21, False)
    assert text[ref.start : ref.end] == ref.full_match  # noqa: E203


def test_force_marker():
    refs = find_references("{{ @!big.log }} {{ @small.txt }}")
    assert [(r.reference, r.force) for r in refs] == [("@!big.log", True), ("@small.txt", False)]


def test_exclamation_elsewhere_is_literal():
    (ref,) = find_references("{{ @file!.txt }}")
    assert ref.reference == "@file!.txt"
    assert ref.force is False


@pytest.mark.parametrize(
    "text",
    [
        "{{@a.txt}}",
        "{{   @a.txt   }}",
        "{{\t@a.txt\n}}",
    ],
)
def test_whitespace_is_optional_and_trimmed(text):
    (ref,) = find_references(text)
    assert ref.reference == "@a.txt"
    assert ref.full_match == text


@pytest.mark.parametrize(
    "text",
    [
        "{{ a.txt }}",
        "{{ @a.txt }",
        "{ @a.txt }}",
        "{{ @a}b.txt }}",
        "plain text without references",
        "",
    ],
)
def test_malformed_tokens_are_skipped(text):
    assert find_references(text) == []


def test_extra_braces_match_innermost_token():
    text = "x {{{ @x }}} y"
    (ref,) = find_references(text)
    assert ref.reference == "@x"
    assert ref.full_match == "{{ @x }}"
    assert text[ref.start : ref.end] == "{{ @x }}"  # noqa: E203


def test_root_references():
    refs = find_references("{{ @. }} {{ @/ }} {{ @ }}")
    assert [r.reference for r in refs] == ["@.", "@/", "@"]


def test_references_are_in_source_order():
    text = "{{ @c }} middle {{ @a }} and {{ @!b/ }}"
    refs = find_references(text)
    assert [r.reference for r in refs] == ["@c", "@a", "@!b/"]
    assert all(r.start < r.end for r in refs)
    assert [r.start for r in refs] == sorted(r.start for r in refs)
    assert all(r.reference.startswith("@") for r in refs)


def test_offsets_are_string_indices_for_non_ascii_text():
    text = "héllo {{ @ß.txt }}"
    (ref,) = find_references(text)
    assert text[ref.start : ref.end] == "{{ @ß.txt }}"  # noqa: E203


def test_iter_references_is_lazy():
    iterator = iter_references("{{ @a }} {{ @b }}")
    assert next(iterator).reference == "@a"
    assert next(iterator).reference == "@b"
    with pytest.raises(StopIteration):
        next(iterator)


def test_references_are_immutable():
    (ref,) = find_references("{{ @a }}")
    with pytest.raises(AttributeError):
        ref.start = 3


def test_broken_pattern_raises_template_parse_error():
    with pytest.raises(TemplateParseError):
        compile_reference_pattern(r"\{\{(@[^}]*")
