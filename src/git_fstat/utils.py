"""Core utility functions: console output, trace logging, command execution."""

import os
import subprocess
import sys
from datetime import datetime

from rich.console import Console

from git_fstat.config import DEBUG_ENV_VAR, LOG_FILE_ENV_VAR

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def _write_log_entry(log_file: str, text: str) -> None:
    """Append text to a log file. Never raises."""
    try:
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(text)
    except Exception:
        pass


def log(message: str, style: str = "") -> None:
    """Trace a message to stderr and to the log file, when either is enabled.

    The stderr echo is switched on by GIT_FSTAT_DEBUG and the file by
    GIT_FSTAT_LOG. Both are off by default so the report stays clean.
    """
    if os.environ.get(DEBUG_ENV_VAR):
        err_console.print(message, style=style or None, markup=False, soft_wrap=True)

    log_file = os.environ.get(LOG_FILE_ENV_VAR, "")
    if log_file:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        _write_log_entry(log_file, f"[{timestamp}] {message}\n")


def run_cmd(args: list[str], cwd: str | None = None) -> subprocess.CompletedProcess:
    """Run a command and capture stdout/stderr as text.

    Undecodable bytes are replaced rather than raising, since file contents
    read through git may be in any encoding.
    """
    log(f"$ {' '.join(args)}", style="dim")
    result = subprocess.run(
        args,
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        errors="replace",
    )
    log(f"  -> exit {result.returncode}", style="dim")
    return result


def is_windows() -> bool:
    return sys.platform == "win32"
