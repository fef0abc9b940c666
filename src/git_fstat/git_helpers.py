"""Git query adapter: typed queries over the git command line.

Every repository fact the tool needs comes from a GitRepo method. The
parsing of git's text output lives in pure parse_* functions so it can be
tested without a repository, and the classifier only depends on the method
names, so tests can hand it a fake.
"""

import enum
import os
import subprocess

from git_fstat.config import (
    DEFAULT_GIT,
    GIT_ENV_VAR,
    LOG_AUTHOR_FORMAT,
    LOG_DATE_FORMAT,
    LOG_DATE_OPTION,
)
from git_fstat.utils import log, run_cmd


class GitQueryError(Exception):
    """A git invocation failed in a way the tool cannot recover from."""


class UnexpectedOutputError(GitQueryError):
    """git succeeded but printed output the parser does not understand."""


class RepoLocation(enum.Enum):
    """Where a directory sits relative to a git repository."""

    WORK_TREE = "work-tree"
    GIT_DIR = "git-dir"
    OUTSIDE = "outside"


def git_executable() -> str:
    """Return the git executable, honoring GIT_FSTAT_GIT."""
    return os.environ.get(GIT_ENV_VAR) or DEFAULT_GIT


# ============================================
# Output parsers (pure functions)
# ============================================


def split_lines(output: str) -> list[str]:
    """Split command output into its non-blank lines."""
    return [line for line in output.splitlines() if line.strip()]


def count_lines(text: str) -> int:
    """Count lines the way git diff does: a trailing partial line counts."""
    if not text:
        return 0
    newlines = text.count("\n")
    return newlines if text.endswith("\n") else newlines + 1


def parse_repo_location(output: str) -> RepoLocation:
    """Interpret `rev-parse --is-inside-git-dir --is-inside-work-tree` output."""
    lines = split_lines(output)
    if len(lines) != 2 or any(line not in ("true", "false") for line in lines):
        raise UnexpectedOutputError(f"Unexpected rev-parse output: {output.strip()!r}")
    inside_git_dir, inside_work_tree = lines
    if inside_git_dir == "true":
        return RepoLocation.GIT_DIR
    if inside_work_tree == "true":
        return RepoLocation.WORK_TREE
    return RepoLocation.OUTSIDE


def parse_status_codes(output: str) -> list[str]:
    """Extract the two-character XY codes from `git status --porcelain` output.

    Leading spaces are significant (" M" is an unstaged change), so lines
    are not stripped.
    """
    codes = []
    for line in output.splitlines():
        if not line:
            continue
        if len(line) < 4 or line[2] != " ":
            raise UnexpectedOutputError(f"Unexpected status line: {line!r}")
        codes.append(line[:2])
    return codes


def parse_numstat(output: str) -> tuple[int, int] | None:
    """Parse `git diff --numstat` output for a single path.

    Returns (inserted, deleted); (0, 0) when git reports no difference and
    None when git reports a binary change ("-\\t-\\t<path>").
    """
    lines = split_lines(output)
    if not lines:
        return (0, 0)
    if len(lines) > 1:
        raise UnexpectedOutputError(f"Expected one numstat line, got {len(lines)}: {output.strip()!r}")
    fields = lines[0].split("\t")
    if len(fields) < 3:
        raise UnexpectedOutputError(f"Unexpected numstat line: {lines[0]!r}")
    if fields[0] == "-" and fields[1] == "-":
        return None
    try:
        return int(fields[0]), int(fields[1])
    except ValueError:
        raise UnexpectedOutputError(f"Unexpected numstat line: {lines[0]!r}") from None


def parse_nul_separated(output: str) -> list[str]:
    """Split `-z` output into its entries."""
    return [entry for entry in output.split("\0") if entry]


# ============================================
# Adapter
# ============================================


class GitRepo:
    """Typed git queries run from one directory.

    All path arguments are names relative to that directory, normally the
    base name of the file being inspected.
    """

    def __init__(self, directory: str, git: str = "") -> None:
        self.directory = directory
        self.git = git or git_executable()

    def _run(self, *args: str, ok_codes: tuple[int, ...] = (0,)) -> subprocess.CompletedProcess:
        cmd = [self.git, "-C", self.directory, *args]
        try:
            result = run_cmd(cmd)
        except FileNotFoundError:
            raise GitQueryError(f"git is not installed or not found in PATH ({self.git})") from None
        if result.returncode not in ok_codes:
            error_msg = result.stderr.strip() or result.stdout.strip() or f"exit code {result.returncode}"
            raise GitQueryError(f"git command failed: git {' '.join(args)}\nError: {error_msg}")
        return result

    def _output(self, *args: str) -> str:
        return self._run(*args).stdout

    # --- repository location ---

    def location(self) -> RepoLocation:
        """Classify the directory as work tree, repository internals, or outside."""
        result = self._run("rev-parse", "--is-inside-git-dir", "--is-inside-work-tree", ok_codes=(0, 128))
        if result.returncode == 128:
            if "not a git repository" in result.stderr.lower():
                return RepoLocation.OUTSIDE
            raise GitQueryError(f"git rev-parse failed: {result.stderr.strip()}")
        return parse_repo_location(result.stdout)

    def is_ignored(self, name: str) -> bool:
        """True when an ignore rule matches name. Tracked files never match."""
        result = self._run("check-ignore", "-q", "--", name, ok_codes=(0, 1))
        return result.returncode == 0

    # --- tracking and status ---

    def has_commits(self) -> bool:
        result = self._run("rev-parse", "--verify", "--quiet", "HEAD", ok_codes=(0, 1))
        return result.returncode == 0

    def has_history(self, name: str) -> bool:
        """True when at least one commit touches name."""
        if not self.has_commits():
            return False
        return bool(split_lines(self._output("log", "-n", "1", "--format=%H", "--", name)))

    def status_codes(self, name: str) -> list[str]:
        """Porcelain status codes for name. Rename detection is off, so a
        staged rename reports as an add."""
        output = self._output("status", "--porcelain", "--no-renames", "--untracked-files=all", "--", name)
        return parse_status_codes(output)

    # --- diff statistics ---

    def diff_stats(self, name: str, staged: bool) -> tuple[int, int] | None:
        """(inserted, deleted) for the staged or unstaged diff; None if binary."""
        args = ["diff", "--numstat", "--no-renames"]
        if staged:
            args.append("--cached")
        return parse_numstat(self._output(*args, "--", name))

    def full_name(self, name: str) -> str:
        """Canonical repository-relative path of name, as listed in the index."""
        entries = parse_nul_separated(self._output("ls-files", "-z", "--full-name", "--", name))
        if len(entries) != 1:
            raise UnexpectedOutputError(f"Expected one index entry for {name}, got {len(entries)}")
        return entries[0]

    def index_line_count(self, name: str) -> int:
        """Line count of the content staged in the index for name."""
        return count_lines(self._output("cat-file", "blob", f":{self.full_name(name)}"))

    def working_line_count(self, name: str) -> int:
        """Line count of the file as it sits in the working tree."""
        with open(os.path.join(self.directory, name), "rb") as f:
            return count_lines(f.read().decode("utf-8", errors="replace"))

    # --- history ---

    def creation_dates(self, name: str, follow: bool) -> list[str]:
        """Formatted dates of the commits that added name."""
        args = ["log", "--diff-filter=A", LOG_DATE_OPTION, LOG_DATE_FORMAT]
        if follow:
            args.append("--follow")
        return split_lines(self._output(*args, "--", name))

    def last_modified_date(self, name: str) -> str | None:
        """Formatted date of the latest commit touching name under its current name."""
        lines = split_lines(self._output("log", "-n", "1", LOG_DATE_OPTION, LOG_DATE_FORMAT, "--", name))
        if not lines:
            log(f"No commits found touching {name}", style="yellow")
            return None
        return lines[0]

    def author_names(self, name: str) -> list[str]:
        """Author of every add/modify commit for name, newest first."""
        return split_lines(self._output("log", "--diff-filter=AM", LOG_AUTHOR_FORMAT, "--", name))
