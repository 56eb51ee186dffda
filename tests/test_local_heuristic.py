"""Tests for gims.llm.local module."""

import re

import pytest

from gims.llm.local import (
    classify_change,
    generate_local_message,
    is_doc_path,
    is_test_path,
)


def _modified(path, added=1, removed=1):
    lines = [f"diff --git a/{path} b/{path}", "index 1111111..2222222 100644",
             f"--- a/{path}", f"+++ b/{path}", "@@ -1 +1 @@"]
    lines += ["-old"] * removed + ["+new"] * added
    return "\n".join(lines) + "\n"


def _deleted(path):
    return "\n".join([
        f"diff --git a/{path} b/{path}",
        "deleted file mode 100644",
        f"--- a/{path}",
        "+++ /dev/null",
        "@@ -1 +0,0 @@",
        "-gone",
    ]) + "\n"


class TestPathClassification:
    """Tests for test and documentation path detection."""

    @pytest.mark.parametrize("path", [
        "tests/test_app.py",
        "src/__tests__/app.js",
        "app.test.js",
        "pkg/handler_test.go",
        "spec/model_spec.rb",
    ])
    def test_test_paths(self, path):
        """Test common test file layouts."""
        assert is_test_path(path)

    @pytest.mark.parametrize("path", ["README.md", "docs/index.html", "CHANGELOG", "guide.rst"])
    def test_doc_paths(self, path):
        """Test common documentation layouts."""
        assert is_doc_path(path)

    def test_source_paths(self):
        """Test ordinary source files are neither."""
        assert not is_test_path("src/app.py")
        assert not is_doc_path("src/app.py")
        assert not is_test_path("")


class TestClassifyChange:
    """Tests for classify_change function."""

    def test_new_file(self, new_file_diff):
        """Test an added file is a feature."""
        assert classify_change(new_file_diff) == ("feat", "add app.js")

    def test_deleted_file(self):
        """Test a deleted file is a chore."""
        assert classify_change(_deleted("old.py")) == ("chore", "remove old.py")

    def test_mostly_removals(self, removal_diff):
        """Test removal-heavy changes are cleanups."""
        assert classify_change(removal_diff) == ("chore", "remove unused code from utils.py")

    def test_mostly_removals_many_files(self):
        """Test removal-heavy changes across files."""
        diff = _modified("a.py", added=0, removed=5) + _modified("b.py", added=1, removed=5)

        assert classify_change(diff) == ("chore", "clean up 2 files")

    def test_only_tests(self):
        """Test changes confined to tests."""
        assert classify_change(_modified("tests/test_app.py")) == ("test", "update tests")

    def test_only_docs(self):
        """Test changes confined to documentation."""
        assert classify_change(_modified("README.md")) == ("docs", "update documentation")

    def test_mixed_with_tests(self):
        """Test source plus test changes count as test updates."""
        diff = _modified("src/app.py") + _modified("tests/test_app.py")

        assert classify_change(diff) == ("test", "update tests")

    def test_single_modified_file(self):
        """Test a plain modification names the file."""
        assert classify_change(_modified("src/app.py")) == ("chore", "update app.py")

    def test_multiple_modified_files(self):
        """Test plain modifications count the files."""
        diff = _modified("src/a.py") + _modified("src/b.py")

        assert classify_change(diff) == ("chore", "update 2 files")

    def test_empty_diff(self):
        """Test no changes at all."""
        assert classify_change("") == ("chore", "update project files")

    def test_headerless_removals(self):
        """Test bare +/- lines without headers."""
        diff = "\n".join(["-x"] * 25 + ["+y"] * 2)

        assert classify_change(diff) == ("chore", "remove unused code")

    def test_headerless_additions_are_feat(self):
        """Test bare added lines with no removals read as new code."""
        assert classify_change("+export function foo(){}\n") == ("feat", "add new code")

    def test_headerless_mixed_names_no_file_count(self):
        """Test a balanced headerless change is not counted as one file."""
        assert classify_change("+a\n-b\n") == ("chore", "update changes")


class TestGenerateLocalMessage:
    """Tests for generate_local_message function."""

    def test_conventional(self, new_file_diff):
        """Test conventional rendering of an added file."""
        message = generate_local_message(new_file_diff, conventional=True)

        assert re.match(r"^feat: add", message)

    def test_plain_is_capitalized(self, new_file_diff):
        """Test plain rendering."""
        assert generate_local_message(new_file_diff) == "Add app.js"

    def test_removal_conventional(self, removal_diff):
        """Test conventional rendering of a removal-heavy change."""
        message = generate_local_message(removal_diff, conventional=True)

        assert message.startswith("chore: remove unused code")

    def test_deterministic(self, sample_diff):
        """Test the same diff always yields the same message."""
        assert generate_local_message(sample_diff) == generate_local_message(sample_diff)

    def test_single_line(self, sample_diff):
        """Test the result is one line."""
        assert "\n" not in generate_local_message(sample_diff, conventional=True)

    def test_headerless_snippet_conventional(self):
        """Test a pasted snippet without diff headers gets a feat subject."""
        message = generate_local_message("+export function foo(){}\n", conventional=True)

        assert re.match(r"^feat: add ", message)

    @pytest.mark.parametrize("diff", [
        "+export function foo(){}\n",
        "+a\n-b\n",
        "-a\n-b\n+c\n",
    ])
    def test_never_counts_one_file_as_plural(self, diff):
        """Test subjects never read "1 files"."""
        assert "1 files" not in generate_local_message(diff)
        assert "1 files" not in generate_local_message(diff, conventional=True)
