"""Tests for reference listing and dry-run reports."""

import json

import pytest

from textcon.cli.reference_report import (
    ReferenceInfo,
    dry_run,
    format_detailed,
    format_json,
    format_plain,
    inspect_reference,
)
from textcon.references import find_references
from textcon.types import FileType


@pytest.fixture
def base(tmp_path):
    root = tmp_path.resolve()
    (root / "docs").mkdir()
    (root / "a.txt").write_text("x" * 2048)
    return root


def inspect_all(text, base):
    return [inspect_reference(reference, base) for reference in find_references(text)]


def test_inspect_file(base):
    (info,) = inspect_all("{{ @a.txt }}", base)
    assert info.path == str(base / "a.txt")
    assert info.exists
    assert info.file_type is FileType.FILE
    assert info.size == 2048
    assert info.error is None


def test_inspect_directory(base):
    (info,) = inspect_all("{{ @!docs/ }}", base)
    assert info.force
    assert info.file_type is FileType.DIRECTORY
    assert info.size is None


def test_inspect_missing(base):
    (info,) = inspect_all("{{ @nope.txt }}", base)
    assert info.exists is False
    assert info.file_type is None
    assert info.error is None


def test_inspect_traversal(base):
    (info,) = inspect_all("{{ @../outside }}", base)
    assert info.path is None
    assert "Path traversal detected" in info.error


def test_inspect_overlong_name(base):
    (info,) = inspect_all("{{ @" + "a" * 300 + " }}", base)
    assert info.path is None
    assert info.error.startswith("IO error: ")


def test_to_dict_omits_unset_fields():
    info = ReferenceInfo("@x", 0, 8, False, error="boom")
    assert info.to_dict() == {"reference": "@x", "start": 0, "end": 8, "force": False, "error": "boom"}


def test_format_plain(base):
    assert format_plain(inspect_all("{{ @a.txt }} {{ @!docs/ }}", base)) == "@a.txt\n@!docs/\n"


def test_format_detailed(base):
    report = format_detailed(inspect_all("{{ @!docs/ }}{{ @../x }}", base))
    assert report == (
        "Reference: @!docs/\n"
        "  Position: 0..13\n"
        "  Force: yes\n"
        f"  Path: {base / 'docs'}\n"
        "  Exists: yes\n"
        "  Type: Directory\n"
        "\n"
        "Reference: @../x\n"
        "  Position: 13..24\n"
        "  Force: no\n"
        f"  Error: Path traversal detected (trying to access files outside working directory): {base.parent / 'x'}\n"
        "\n"
    )


def test_format_json(base):
    listed = json.loads(format_json(inspect_all("{{ @a.txt }}", base)))
    assert listed == [
        {
            "reference": "@a.txt",
            "start": 0,
            "end": 12,
            "force": False,
            "path": str(base / "a.txt"),
            "exists": True,
            "file_type": "file",
            "size": 2048,
        }
    ]


def test_format_empty():
    assert format_plain([]) == ""
    assert format_detailed([]) == ""
    assert format_json([]) == "[]\n"


def test_dry_run_summary(base):
    summary, invalid = dry_run(find_references("{{ @a.txt }} {{ @docs/ }} {{ @gone.txt }}"), base)
    assert invalid == 1
    assert summary == "\nSummary: 3 references found\n  ✓ 2 valid\n  ✗ 1 invalid\n"


def test_dry_run_all_valid(base):
    summary, invalid = dry_run(find_references("{{ @a.txt }}"), base)
    assert invalid == 0
    assert summary == "\nSummary: 1 references found\n  ✓ 1 valid\n"


def test_dry_run_no_references(base):
    summary, invalid = dry_run([], base)
    assert invalid == 0
    assert summary == "\nSummary: 0 references found\n"
