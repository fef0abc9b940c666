"""Report assembly and rendering.

inspect_file() runs the queries the requested verbosity needs and returns
an immutable FileReport. render_report() turns it into (text, style)
lines; print_report() sends those to the console.
"""

from dataclasses import dataclass

from git_fstat.classifier import (
    TRACKED_CLASSIFICATIONS,
    FileClassification,
    FileStatus,
    classify,
)
from git_fstat.config import (
    CLASSIFICATION_STYLES,
    DEFAULT_VERBOSITY,
    DETAIL_STYLE,
    HISTORY_VERBOSITY,
    WARNING_STYLE,
)
from git_fstat.git_helpers import UnexpectedOutputError
from git_fstat.history import History, lookup_history
from git_fstat.summary import BINARY_SUMMARY, ChangeStats, Summary, format_summary, summarize
from git_fstat.utils import console

CLASSIFICATION_TEXT = {
    FileClassification.OUTSIDE_REPO: "not inside a git repository",
    FileClassification.INTERNAL_REPO_FILE: "internal git repository file",
    FileClassification.IGNORED: "ignored",
    FileClassification.UNTRACKED: "untracked",
    FileClassification.TRACKED_NO_CHANGES: "tracked, no changes",
    FileClassification.NEW_WITH_CHANGES: "new, not yet committed",
    FileClassification.TRACKED_WITH_CHANGES: "tracked, with changes",
}


@dataclass(frozen=True)
class FileReport:
    path: str
    status: FileStatus
    staged: Summary | None = None
    unstaged: Summary | None = None
    history: History | None = None


def change_summary(git, name: str, staged: bool) -> Summary:
    """Summarize the staged (index vs HEAD) or unstaged (working tree vs index) diff."""
    counts = git.diff_stats(name, staged=staged)
    if counts is None:
        return BINARY_SUMMARY
    total = git.index_line_count(name) if staged else git.working_line_count(name)
    inserted, deleted = counts
    try:
        return summarize(ChangeStats(inserted, deleted, total))
    except ValueError as exc:
        raise UnexpectedOutputError(f"{name}: {exc}") from exc


def inspect_file(git, name: str, path: str, verbosity: int = DEFAULT_VERBOSITY) -> FileReport:
    """Classify name and gather the details shown at this verbosity."""
    status = classify(git, name)
    if verbosity < DEFAULT_VERBOSITY:
        return FileReport(path, status)

    staged = change_summary(git, name, staged=True) if status.is_staged else None
    unstaged = change_summary(git, name, staged=False) if status.is_modified else None

    history = None
    if verbosity >= HISTORY_VERBOSITY and status.classification in TRACKED_CLASSIFICATIONS:
        history = lookup_history(git, name)

    return FileReport(path, status, staged=staged, unstaged=unstaged, history=history)


def describe_status(status: FileStatus) -> str:
    """One-line description of a classification, e.g. 'tracked, with changes (staged)'."""
    text = CLASSIFICATION_TEXT[status.classification]
    if status.classification not in (
        FileClassification.NEW_WITH_CHANGES,
        FileClassification.TRACKED_WITH_CHANGES,
    ):
        return text
    if status.is_staged and status.is_modified:
        return f"{text} (staged and unstaged)"
    if status.is_staged:
        return f"{text} (staged)"
    return f"{text} (unstaged)"


def _history_lines(history: History) -> list[tuple[str, str]]:
    lines = []
    if history.created_warning:
        lines.append((f"  Created:         {history.created or 'unknown'} [{history.created_warning}]", WARNING_STYLE))
    else:
        lines.append((f"  Created:         {history.created or 'unknown'}", DETAIL_STYLE))
    lines.append((f"  Last modified:   {history.last_modified or 'unknown'}", DETAIL_STYLE))
    if history.top_contributor:
        lines.append(
            (
                f"  Top contributor: {history.top_contributor} "
                f"({history.contributor_commits} of {history.total_commits} commits)",
                DETAIL_STYLE,
            )
        )
    else:
        lines.append(("  Top contributor: unknown", DETAIL_STYLE))
    return lines


def render_report(report: FileReport, verbosity: int = DEFAULT_VERBOSITY) -> list[tuple[str, str]]:
    """Render a report as (text, style) lines.

    Pure function. Verbosity 0 gives the classification line only; 1 adds
    staged/unstaged summaries; 2 and above add history.
    """
    status = report.status
    lines = [
        (
            f"{report.path}: {describe_status(status)}",
            CLASSIFICATION_STYLES[status.classification.value],
        )
    ]
    if verbosity < DEFAULT_VERBOSITY:
        return lines

    if report.staged is not None:
        lines.append((f"  Staged:   {format_summary(report.staged)}", DETAIL_STYLE))
    if report.unstaged is not None:
        lines.append((f"  Unstaged: {format_summary(report.unstaged)}", DETAIL_STYLE))

    if verbosity >= HISTORY_VERBOSITY and report.history is not None:
        lines.extend(_history_lines(report.history))
    return lines


def print_report(report: FileReport, verbosity: int = DEFAULT_VERBOSITY) -> None:
    for text, style in render_report(report, verbosity):
        console.print(text, style=style or None, markup=False, soft_wrap=True)
