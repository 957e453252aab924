"""Tests for the review admission gate."""

from diffscout_core.config import ReviewConfig
from diffscout_core.gate import MAX_PATCH_CHARS, filter_admissible, is_admissible
from diffscout_core.models import ChangedFile


def make_file(filename="src/a.ts", status="modified", patch="+x", contents_url=None):
    if contents_url is None:
        contents_url = f"https://api.github.com/repos/octo/app/contents/{filename}?ref=abc"
    return ChangedFile(filename=filename, status=status, patch=patch, contents_url=contents_url)


class TestIsAdmissible:
    def test_added_and_modified_admitted(self):
        assert is_admissible(make_file(status="added")) is True
        assert is_admissible(make_file(status="modified")) is True

    def test_removed_never_admitted(self):
        assert is_admissible(make_file(status="removed", patch="-x")) is False
        assert is_admissible(make_file(status="removed", patch="-x"), include_patterns=["*.ts"]) is False

    def test_renamed_not_admitted(self):
        assert is_admissible(make_file(status="renamed")) is False

    def test_missing_or_empty_patch_rejected(self):
        assert is_admissible(make_file(patch=None)) is False
        assert is_admissible(make_file(patch="")) is False

    def test_patch_at_ceiling_admitted(self):
        patch = "+" + "x" * (MAX_PATCH_CHARS - 1)
        assert len(patch) == 1500
        assert is_admissible(make_file(patch=patch)) is True

    def test_patch_over_ceiling_rejected(self):
        patch = "+" + "x" * MAX_PATCH_CHARS
        assert len(patch) == 1501
        assert is_admissible(make_file(patch=patch)) is False

    def test_include_patterns_match_contents_path(self):
        assert is_admissible(make_file(), include_patterns=["/contents/src/**"]) is True
        assert is_admissible(make_file(), include_patterns=["/contents/lib/**"]) is False

    def test_ignore_patterns_exclude(self):
        assert is_admissible(make_file(filename="yarn.lock"), ignore_patterns=["*.lock"]) is False

    def test_include_wins_over_ignore(self):
        assert is_admissible(make_file(), include_patterns=["*.ts"], ignore_patterns=["*.ts"]) is True

    def test_filename_used_without_contents_url(self):
        f = ChangedFile(filename="src/a.ts", status="added", patch="+x")
        assert is_admissible(f, include_patterns=["src/*.ts"]) is True


class TestFilterAdmissible:
    FILES = [
        make_file("src/a.ts", "added"),
        make_file("src/gone.ts", "removed", "-x"),
        make_file("yarn.lock", "modified"),
        make_file("src/b.ts", "modified", "+" + "y" * 2000),
        make_file("src/c.ts", "modified"),
    ]

    def test_no_patterns_pass_every_syntactically_admissible_file(self):
        result = filter_admissible(self.FILES, ReviewConfig())
        assert [f.filename for f in result] == ["src/a.ts", "yarn.lock", "src/c.ts"]

    def test_order_preserved_with_ignore(self):
        result = filter_admissible(self.FILES, ReviewConfig(ignore_patterns=("*.lock",)))
        assert [f.filename for f in result] == ["src/a.ts", "src/c.ts"]

    def test_configured_ceiling_used(self):
        result = filter_admissible(self.FILES, ReviewConfig(max_patch_chars=5000))
        assert "src/b.ts" in [f.filename for f in result]

    def test_empty_when_nothing_admissible(self):
        assert filter_admissible([make_file(status="removed")], ReviewConfig()) == []

    def test_idempotent(self):
        config = ReviewConfig(include_patterns=("*.ts",), ignore_patterns=("src/c.ts",))
        first = filter_admissible(self.FILES, config)
        second = filter_admissible(self.FILES, config)
        assert first == second
        assert filter_admissible(first, config) == first
