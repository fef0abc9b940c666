"""CLI app definition: argument handling, usage and manual output."""

import os
import re
from typing import Annotated, Optional

import typer

from git_fstat.config import DEFAULT_VERBOSITY, FATAL_STYLE
from git_fstat.git_helpers import GitQueryError, GitRepo
from git_fstat.report import inspect_file, print_report
from git_fstat.utils import console, err_console, is_windows, log
from git_fstat.version import get_version

USAGE = "usage: git-fstat [-v | --verbose]... [-q | --quiet]... [--] <file>"

MANUAL = """\
NAME
    git-fstat - show the version-control status of a single file

SYNOPSIS
    git-fstat [-v | --verbose]... [-q | --quiet]... [--] <file>
    git fstat [options] [--] <file>

DESCRIPTION
    Classifies <file> as one of:

        not inside a git repository
        internal git repository file
        ignored
        untracked
        tracked, no changes
        new, not yet committed
        tracked, with changes

    For new and changed files, the staged diff (index against the last
    commit) and the unstaged diff (working tree against the index) are
    summarized as a size change and a share of modified lines, e.g.

        Staged:   Size change: +4% Modified lines: 4% (622 lines total)

    "all new" marks a diff against an empty baseline.

OPTIONS
    -v, --verbose
        Show more. Repeatable. At level 2 the creation date, the date of
        the last commit touching the file and the top contributor are
        added.

    -q, --quiet
        Show less. Repeatable. At level 0 only the classification is
        printed.

    The level starts at 1 and is never below 0.

    -h      Show a short usage line.
    --help  Show this manual.
    --version
            Show the version.
    --      End of options; the next argument is the file.

ENVIRONMENT
    GIT_FSTAT_GIT    git executable to run (default: git)
    GIT_FSTAT_LOG    append every git invocation to this file
    GIT_FSTAT_DEBUG  echo every git invocation to stderr
    PAGER            pager used for --help

EXIT STATUS
    0 when the file was classified, including files outside a repository,
    inside repository internals, or ignored. 2 on invalid arguments. 1 when
    git fails or prints output that cannot be interpreted.

LIMITATIONS
    Renamed files are reported as new: rename detection is not applied to
    the status query.

    A file that is tracked but also matches an ignore rule is reported by
    its tracked state.

    When following renames finds more than one commit adding the file, the
    creation date is looked up on the current name only and flagged with a
    warning.

    Ties for top contributor are broken alphabetically.
"""

_WINDOWS_DRIVE_RE = re.compile(r"^[A-Za-z]:")


def net_verbosity(verbose: int, quiet: int) -> int:
    """Net verbosity level: default plus -v count minus -q count, floored at 0."""
    return max(0, DEFAULT_VERBOSITY + verbose - quiet)


def validate_path(path: str) -> str:
    """Return a usage error message for path, or an empty string if it is usable.

    Pure-ish function: only inspects the filesystem.
    """
    if os.path.splitdrive(path)[0] or (is_windows() and _WINDOWS_DRIVE_RE.match(path)):
        return f"{path}: paths with a drive or volume component are not supported"
    if not os.path.exists(path):
        return f"{path}: no such file"
    if not os.path.isfile(path):
        return f"{path}: not a regular file"
    return ""


def _usage_error(message: str) -> None:
    err_console.print(f"error: {message}", style=FATAL_STYLE, markup=False, soft_wrap=True)
    err_console.print(USAGE, markup=False, soft_wrap=True)
    raise typer.Exit(code=2)


def _version_callback(value: bool):
    if value:
        console.print(get_version(), markup=False)
        raise typer.Exit()


def _short_help_callback(value: bool):
    if value:
        console.print(USAGE, markup=False, soft_wrap=True)
        console.print("Run 'git-fstat --help' for the full manual.", markup=False)
        raise typer.Exit()


def _manual_callback(value: bool):
    if value:
        with console.pager():
            console.print(MANUAL, markup=False, soft_wrap=True)
        raise typer.Exit()


app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": []},
)


@app.command()
def fstat(
    path: Annotated[Optional[str], typer.Argument(show_default=False)] = None,
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True)] = 0,
    quiet: Annotated[int, typer.Option("--quiet", "-q", count=True)] = 0,
    short_help: Annotated[
        bool, typer.Option("-h", callback=_short_help_callback, is_eager=True)
    ] = False,
    manual: Annotated[
        bool, typer.Option("--help", callback=_manual_callback, is_eager=True)
    ] = False,
    version: Annotated[
        bool, typer.Option("--version", callback=_version_callback, is_eager=True)
    ] = False,
) -> None:
    """Show the version-control status of a single file."""
    if path is None:
        _usage_error("missing file argument")
    problem = validate_path(path)
    if problem:
        _usage_error(problem)

    verbosity = net_verbosity(verbose, quiet)
    directory, name = os.path.split(os.path.abspath(path))
    log(f"Inspecting {name} in {directory} (verbosity {verbosity})")

    try:
        report = inspect_file(GitRepo(directory), name, path, verbosity)
    except (GitQueryError, OSError) as exc:
        err_console.print(f"FATAL: {exc}", style=FATAL_STYLE, markup=False, soft_wrap=True)
        raise typer.Exit(code=1)

    print_report(report, verbosity)


def main() -> None:
    app(prog_name="git-fstat")
