"""Status classification: where a file stands relative to its repository.

classify() runs an ordered sequence of guard checks and returns at the
first one that decides the outcome:

1. outside a repository / inside repository internals
2. matched by an ignore rule
3. tracked (has history) and staged/modified (from the status code)

Known limitations: renamed files report as new, and a file that is both
ignored and tracked is not treated specially (git check-ignore skips
tracked files, so it falls through to the tracked branches).
"""

import enum
from dataclasses import dataclass

from git_fstat.git_helpers import GitQueryError, RepoLocation, UnexpectedOutputError


class FileClassification(enum.Enum):
    OUTSIDE_REPO = "outside-repo"
    INTERNAL_REPO_FILE = "internal-repo-file"
    IGNORED = "ignored"
    UNTRACKED = "untracked"
    TRACKED_NO_CHANGES = "tracked-no-changes"
    NEW_WITH_CHANGES = "new-with-changes"
    TRACKED_WITH_CHANGES = "tracked-with-changes"


TRACKED_CLASSIFICATIONS = {
    FileClassification.TRACKED_NO_CHANGES,
    FileClassification.TRACKED_WITH_CHANGES,
}


@dataclass(frozen=True)
class FileStatus:
    """Classifier result: the classification plus staged/modified flags."""

    classification: FileClassification
    is_staged: bool = False
    is_modified: bool = False


class FileDeletedError(GitQueryError):
    """git reports the file as deleted although it exists on disk."""


def status_flags(name: str, codes: list[str]) -> tuple[bool, bool]:
    """Translate porcelain status codes into (is_staged, is_modified).

    Pure function. An empty list means git sees no changes. A leading A or
    M means staged; a trailing M means modified in the working tree. Any D
    is fatal, and so is more than one status line for a single file or any
    other code (conflicts, type changes).
    """
    for code in codes:
        if "D" in code:
            raise FileDeletedError(f"{name} is marked deleted in git status ({code!r})")
    if not codes:
        return False, False
    if len(codes) > 1:
        raise UnexpectedOutputError(f"Expected at most one status line for {name}, got {len(codes)}")
    code = codes[0]
    if code == "??":
        return False, False
    if code[0] not in "AM " or code[1] not in "M ":
        raise UnexpectedOutputError(f"Unexpected status code {code!r} for {name}")
    return code[0] in "AM", code[1] == "M"


def classify(git, name: str) -> FileStatus:
    """Classify name (relative to the adapter's directory)."""
    location = git.location()
    if location is RepoLocation.OUTSIDE:
        return FileStatus(FileClassification.OUTSIDE_REPO)
    if location is RepoLocation.GIT_DIR:
        return FileStatus(FileClassification.INTERNAL_REPO_FILE)

    if git.is_ignored(name):
        return FileStatus(FileClassification.IGNORED)

    tracked = git.has_history(name)
    is_staged, is_modified = status_flags(name, git.status_codes(name))

    if not tracked and not is_staged:
        return FileStatus(FileClassification.UNTRACKED)
    if not tracked:
        return FileStatus(FileClassification.NEW_WITH_CHANGES, is_staged, is_modified)
    if is_staged or is_modified:
        return FileStatus(FileClassification.TRACKED_WITH_CHANGES, is_staged, is_modified)
    return FileStatus(FileClassification.TRACKED_NO_CHANGES)
