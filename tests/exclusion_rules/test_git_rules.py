from pathlib import Path

import pytest

from textcon.exceptions import PatternError, TextconIOError
from textcon.exclusion_rules.git_rules import GitIgnoreExclusionRules


@pytest.fixture
def temp_gitignore(tmp_path):
    path = tmp_path / "gitignore"
    path.write_text("*.txt\n!important.txt\nsubdir/\n*.py[cod]\n**/__pycache__/\n")
    return path


@pytest.fixture
def temp_customignore(tmp_path):
    path = tmp_path / "customignore"
    path.write_text("# generated files\n\n*.json\n!important.json\ndist/\n")
    return path


@pytest.mark.parametrize(
    "path,expected",
    [
        ("file.txt", True),
        ("important.txt", False),
        ("file.py", False),
        ("subdir/file.py", True),
        ("subdir/important.txt", True),
        ("another_dir/file.txt", True),
        ("another_dir/file.py", False),
        ("nested/subdir/file.txt", True),
        ("file.pyc", True),
        ("__pycache__/cache_file.py", True),
        ("lib/__pycache__/cache_file.py", True),
    ],
)
def test_gitignore_exclusion_rules(temp_gitignore, path, expected):
    rules = GitIgnoreExclusionRules(temp_gitignore)
    assert rules.exclude(path) == expected, f"Failed for path: {path}"


def test_bare_name_matches_at_any_depth():
    rules = GitIgnoreExclusionRules.from_patterns(["node_modules"])
    assert rules.exclude("node_modules/")
    assert rules.exclude("web/node_modules/")
    assert rules.exclude("web/node_modules")


def test_trailing_slash_matches_directories_only():
    rules = GitIgnoreExclusionRules.from_patterns(["build/"])
    assert rules.exclude("build/")
    assert rules.exclude("src/build/")
    assert not rules.exclude("build")


def test_leading_slash_anchors_to_base():
    rules = GitIgnoreExclusionRules.from_patterns(["/dist"])
    assert rules.exclude("dist")
    assert not rules.exclude("web/dist")


def test_comments_and_blank_lines_are_ignored(temp_customignore):
    rules = GitIgnoreExclusionRules(temp_customignore)
    assert rules.exclude("config.json")
    assert not rules.exclude("important.json")
    assert not rules.exclude("# generated files")


def test_empty_rules_exclude_nothing():
    rules = GitIgnoreExclusionRules(None)
    assert not rules.has_rules()
    assert not rules.exclude("anything.txt")
    assert not rules.exclude("node_modules/module.js")


def test_comment_only_rules_have_no_effective_patterns():
    rules = GitIgnoreExclusionRules.from_patterns(["# nothing", ""])
    assert not rules.has_rules()


def test_nonexistent_file_raises_io_error(tmp_path):
    with pytest.raises(TextconIOError) as exc_info:
        GitIgnoreExclusionRules(tmp_path / "nonexistent_file")
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_invalid_pattern_raises_pattern_error():
    rules = GitIgnoreExclusionRules()
    with pytest.raises(PatternError) as exc_info:
        rules.add_rule("trailing\\")
    assert exc_info.value.pattern == "trailing\\"


def test_multiple_files_keep_their_order(temp_gitignore, temp_customignore):
    rules = GitIgnoreExclusionRules([temp_gitignore, temp_customignore])
    assert rules.exclude("file.txt")
    assert not rules.exclude("important.txt")
    assert rules.exclude("config.json")
    assert rules.exclude("dist/")


def test_later_negation_overrides(tmp_path):
    first = tmp_path / "first"
    first.write_text("*.md\n")
    second = tmp_path / "second"
    second.write_text("!README.md\n")

    rules = GitIgnoreExclusionRules([first, second])
    assert rules.exclude("CONTRIBUTING.md")
    assert not rules.exclude("README.md")

    rules.add_rule("README.md")
    assert rules.exclude("README.md")


def test_input_type_handling(temp_gitignore):
    assert GitIgnoreExclusionRules(str(temp_gitignore)).exclude("file.txt")
    assert GitIgnoreExclusionRules(Path(temp_gitignore)).exclude("file.txt")
    assert GitIgnoreExclusionRules([temp_gitignore]).exclude("file.txt")


@pytest.mark.parametrize(
    "path,expected",
    [("a.log", True), ("keep.log", False), ("a.txt", None), ("logs/keep.log", False)],
)
def test_match_state(path, expected):
    rules = GitIgnoreExclusionRules.from_patterns(["*.log", "!keep.log"])
    assert rules.match_state(path) is expected
