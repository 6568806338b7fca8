"""Tests for first-parent commit history extraction."""

from __future__ import annotations

import pytest

from tagbump.core.commits import collect_commit_log, format_commit_line, previous_tag_boundary
from tagbump.exceptions import NoCommitsFoundError, TagNotFoundError
from tagbump.vcs.base import Commit
from tests.helpers import sha_for


class TestCommit:
    """Tests for the Commit value type."""

    def test_short_sha(self):
        commit = Commit(sha="0123456789abcdef0123456789abcdef01234567", parents=(), summary="x")
        assert commit.short_sha == "0123456"

    def test_first_parent(self):
        commit = Commit(sha=sha_for(3), parents=(sha_for(2), sha_for(9)), summary="x")
        assert commit.first_parent == sha_for(2)

    def test_root_has_no_first_parent(self):
        assert Commit(sha=sha_for(1), parents=(), summary="x").first_parent is None

    def test_merge_by_parent_count(self):
        commit = Commit(sha=sha_for(3), parents=(sha_for(1), sha_for(2)), summary="Integrate x")
        assert commit.is_merge

    def test_merge_by_message(self):
        commit = Commit(sha=sha_for(3), parents=(sha_for(1),), summary="Merge branch 'x'")
        assert commit.is_merge

    def test_merge_prefix_is_case_sensitive(self):
        """Only the literal 'Merge ' prefix marks a merge."""
        assert not Commit(sha_for(3), (sha_for(1),), "merge helper added").is_merge
        assert not Commit(sha_for(3), (sha_for(1),), "Mergesort speedup").is_merge


class TestFormatCommitLine:
    """Tests for format_commit_line()."""

    def test_format(self):
        commit = Commit(
            sha="abcdef1234567890abcdef1234567890abcdef12",
            parents=(),
            summary="feat: add login",
        )
        assert format_commit_line(commit) == "abcdef1 feat: add login"


class TestCollectCommitLog:
    """Tests for collect_commit_log()."""

    def test_newest_first_until_boundary(self, make_repo):
        """The boundary commit is excluded."""
        repo = make_repo(["release 1.0", "fix a", "feat b"], tags={"v1.0.0": 0})

        lines = collect_commit_log(repo, stop_at=repo.tags["v1.0.0"])

        assert lines == [f"{sha_for(3)[:7]} feat b", f"{sha_for(2)[:7]} fix a"]

    def test_merge_excluded_and_free(self, make_repo):
        """Three commits since the tag, one a merge: two lines, cap not consumed."""
        repo = make_repo(
            ["release 1.0", "fix a", "Merge branch 'x'", "feat b"],
            tags={"v1.0.0": 0},
        )

        lines = collect_commit_log(repo, stop_at=repo.tags["v1.0.0"], max_commits=2)

        assert [line.split(" ", 1)[1] for line in lines] == ["feat b", "fix a"]

    def test_true_merge_skipped(self, make_repo):
        """Two-parent commits are skipped even with a normal message."""
        repo = make_repo(["root", "Integrate feature", "after"], merges=[1])

        lines = collect_commit_log(repo)

        assert [line.split(" ", 1)[1] for line in lines] == ["after", "root"]

    def test_side_branch_not_visited(self, make_repo):
        """Only first parents are followed."""
        repo = make_repo(["root", "Merge pull request #1", "after"], merges=[1])

        collect_commit_log(repo)

        assert sha_for(1001) not in repo.visited

    def test_max_commits_caps_output(self, make_repo):
        repo = make_repo([f"change {i}" for i in range(10)])

        lines = collect_commit_log(repo, max_commits=3)

        assert [line.split(" ", 1)[1] for line in lines] == ["change 9", "change 8", "change 7"]

    def test_stops_walking_at_cap(self, make_repo):
        """Commits beyond the cap are not read."""
        repo = make_repo([f"change {i}" for i in range(10)])

        collect_commit_log(repo, max_commits=2)

        assert len(repo.visited) == 2

    def test_walks_to_root_without_boundary(self, make_repo):
        repo = make_repo(["first", "second"])

        assert len(collect_commit_log(repo)) == 2

    def test_boundary_checked_before_cap(self, make_repo):
        """Boundary at HEAD yields nothing, even with budget left."""
        repo = make_repo(["only"], tags={"v1.0.0": 0})

        with pytest.raises(NoCommitsFoundError):
            collect_commit_log(repo, stop_at=repo.tags["v1.0.0"])

    def test_only_merges_raises(self, make_repo):
        repo = make_repo(["Merge branch 'a'", "Merge branch 'b'"])

        with pytest.raises(NoCommitsFoundError, match="No commits found"):
            collect_commit_log(repo)

    def test_length_never_exceeds_cap(self, make_repo):
        repo = make_repo(
            [f"Merge {i}" if i % 3 == 0 else f"change {i}" for i in range(30)],
            tags={"v0.1.0": 4},
        )

        for cap in (1, 5, 50):
            lines = collect_commit_log(repo, stop_at=repo.tags["v0.1.0"], max_commits=cap)
            assert len(lines) <= cap
            assert not any(line.split(" ", 1)[1].startswith("Merge ") for line in lines)


class TestPreviousTagBoundary:
    """Tests for previous_tag_boundary()."""

    def test_none_for_initial_release(self, make_repo):
        assert previous_tag_boundary(make_repo(["a"]), None) is None

    def test_resolves_tag(self, make_repo):
        repo = make_repo(["a", "b"], tags={"v1.0.0": 0})

        assert previous_tag_boundary(repo, "v1.0.0") == sha_for(1)

    def test_missing_tag_raises(self, make_repo):
        with pytest.raises(TagNotFoundError):
            previous_tag_boundary(make_repo(["a"]), "v9.9.9")
