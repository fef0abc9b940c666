"""Tests for status classification against a fake git adapter."""

import pytest

from git_fstat.classifier import (
    FileClassification,
    FileDeletedError,
    FileStatus,
    classify,
    status_flags,
)
from git_fstat.git_helpers import GitQueryError, RepoLocation, UnexpectedOutputError


class FakeGit:
    """Answers classifier queries from fixed values and records which were asked."""

    def __init__(self, location=RepoLocation.WORK_TREE, ignored=False, history=False, codes=()):
        self._location = location
        self._ignored = ignored
        self._history = history
        self._codes = list(codes)
        self.asked = []

    def location(self):
        self.asked.append("location")
        return self._location

    def is_ignored(self, name):
        self.asked.append("is_ignored")
        return self._ignored

    def has_history(self, name):
        self.asked.append("has_history")
        return self._history

    def status_codes(self, name):
        self.asked.append("status_codes")
        return self._codes


# ============================================
# status_flags (pure function)
# ============================================


def test_no_status_line_means_no_changes():
    assert status_flags("a.txt", []) == (False, False)


def test_index_add_or_modify_is_staged():
    assert status_flags("a.txt", ["A "]) == (True, False)
    assert status_flags("a.txt", ["M "]) == (True, False)


def test_worktree_modify_is_modified():
    assert status_flags("a.txt", [" M"]) == (False, True)
    assert status_flags("a.txt", ["MM"]) == (True, True)
    assert status_flags("a.txt", ["AM"]) == (True, True)


def test_untracked_code_sets_nothing():
    assert status_flags("a.txt", ["??"]) == (False, False)


def test_deleted_code_is_fatal():
    with pytest.raises(FileDeletedError):
        status_flags("a.txt", ["D "])
    with pytest.raises(FileDeletedError):
        status_flags("a.txt", [" D"])


def test_deleted_error_is_a_git_query_error():
    assert issubclass(FileDeletedError, GitQueryError)


def test_removed_from_index_but_present_on_disk_is_fatal():
    """git rm --cached leaves a 'D ' line plus a '??' line; the delete wins."""
    with pytest.raises(FileDeletedError):
        status_flags("a.txt", ["D ", "??"])


def test_more_than_one_status_line_is_unexpected():
    with pytest.raises(UnexpectedOutputError):
        status_flags("a.txt", ["M ", "??"])


# ============================================
# classify
# ============================================


def test_outside_repo_short_circuits():
    git = FakeGit(location=RepoLocation.OUTSIDE, ignored=True, history=True, codes=["M "])
    assert classify(git, "a.txt") == FileStatus(FileClassification.OUTSIDE_REPO)
    assert git.asked == ["location"]


def test_internal_repo_file_short_circuits():
    git = FakeGit(location=RepoLocation.GIT_DIR)
    assert classify(git, "config").classification is FileClassification.INTERNAL_REPO_FILE
    assert git.asked == ["location"]


def test_ignored_file_stops_before_status():
    git = FakeGit(ignored=True)
    status = classify(git, "build.log")
    assert status == FileStatus(FileClassification.IGNORED)
    assert "status_codes" not in git.asked


def test_untracked_file():
    git = FakeGit(codes=["??"])
    assert classify(git, "scratch.py") == FileStatus(FileClassification.UNTRACKED)


def test_staged_new_file():
    git = FakeGit(codes=["A "])
    assert classify(git, "new.py") == FileStatus(FileClassification.NEW_WITH_CHANGES, True, False)


def test_staged_new_file_with_unstaged_edits():
    git = FakeGit(codes=["AM"])
    assert classify(git, "new.py") == FileStatus(FileClassification.NEW_WITH_CHANGES, True, True)


def test_tracked_file_without_changes():
    git = FakeGit(history=True)
    assert classify(git, "app.py") == FileStatus(FileClassification.TRACKED_NO_CHANGES)


def test_tracked_file_with_staged_changes():
    git = FakeGit(history=True, codes=["M "])
    assert classify(git, "app.py") == FileStatus(FileClassification.TRACKED_WITH_CHANGES, True, False)


def test_tracked_file_with_unstaged_changes():
    git = FakeGit(history=True, codes=[" M"])
    assert classify(git, "app.py") == FileStatus(FileClassification.TRACKED_WITH_CHANGES, False, True)


def test_staged_rename_reports_as_new():
    """Rename detection is off, so the new name shows as an add with no history."""
    git = FakeGit(history=False, codes=["A "])
    assert classify(git, "renamed.py").classification is FileClassification.NEW_WITH_CHANGES


def test_deleted_status_aborts_classification():
    git = FakeGit(history=True, codes=["D "])
    with pytest.raises(FileDeletedError):
        classify(git, "app.py")


# ============================================
# Codes the classifier does not interpret
# ============================================


@pytest.mark.parametrize("code", ["UU", "AA", " T", "T ", "MT", " A", "R ", "!!"])
def test_uninterpreted_status_code_is_unexpected(code):
    with pytest.raises(UnexpectedOutputError, match="Unexpected status code"):
        status_flags("a.txt", [code])


def test_merge_conflict_aborts_classification():
    git = FakeGit(history=True, codes=["UU"])
    with pytest.raises(UnexpectedOutputError):
        classify(git, "app.py")
