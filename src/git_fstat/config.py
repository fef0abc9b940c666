"""Configuration constants for git-fstat.

Verbosity levels, environment variable names, git log formatting, and the
console style used for each part of the report.
"""

# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

# Overrides the git executable (default: "git" on PATH).
GIT_ENV_VAR = "GIT_FSTAT_GIT"
# When set, every git invocation is appended to this file.
LOG_FILE_ENV_VAR = "GIT_FSTAT_LOG"
# When set to a non-empty value, git invocations are echoed to stderr.
DEBUG_ENV_VAR = "GIT_FSTAT_DEBUG"

DEFAULT_GIT = "git"


# ---------------------------------------------------------------------------
# Verbosity levels (net level = 1 + verbose - quiet, floored at 0)
# ---------------------------------------------------------------------------

QUIET_VERBOSITY = 0
DEFAULT_VERBOSITY = 1
HISTORY_VERBOSITY = 2


# ---------------------------------------------------------------------------
# git log formatting
# ---------------------------------------------------------------------------

LOG_DATE_OPTION = "--date=format:%Y-%m-%d %H:%M"
LOG_DATE_FORMAT = "--format=%ad (%ar)"
LOG_AUTHOR_FORMAT = "--format=%an"


# ---------------------------------------------------------------------------
# Report styles, keyed by FileClassification value
# ---------------------------------------------------------------------------

CLASSIFICATION_STYLES = {
    "outside-repo": "dim",
    "internal-repo-file": "magenta",
    "ignored": "dim",
    "untracked": "yellow",
    "tracked-no-changes": "green",
    "new-with-changes": "bold cyan",
    "tracked-with-changes": "bold yellow",
}

DETAIL_STYLE = ""
WARNING_STYLE = "yellow"
FATAL_STYLE = "bold red"
