"""Change summaries: size change and modified-line percentages."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChangeStats:
    """Line counts for one diff, plus the file's line count after it."""

    inserted: int
    deleted: int
    total_lines_after: int

    @property
    def prior_lines(self) -> int:
        return self.total_lines_after - self.inserted + self.deleted


@dataclass(frozen=True)
class Summary:
    size_change_percent: int | None
    modified_lines_percent: int | None
    total_lines: int
    all_new: bool
    binary: bool = False


BINARY_SUMMARY = Summary(
    size_change_percent=None,
    modified_lines_percent=None,
    total_lines=0,
    all_new=False,
    binary=True,
)


def round_percent(numerator: int, denominator: int) -> int:
    """Return numerator * 100 / denominator, rounded half away from zero.

    Integer arithmetic, so .5 cases are exact.
    """
    scaled = abs(numerator) * 100
    rounded = (2 * scaled + denominator) // (2 * denominator)
    return -rounded if numerator < 0 else rounded


def summarize(stats: ChangeStats) -> Summary:
    """Compute percentages for a diff.

    Pure function. size_change_percent is None when there were no prior
    lines (and all_new is then True); modified_lines_percent is None when
    the file is empty after the change.
    """
    prior = stats.prior_lines
    if prior < 0:
        raise ValueError(
            f"Inconsistent line counts: +{stats.inserted}/-{stats.deleted} "
            f"with {stats.total_lines_after} lines after"
        )
    size_change = round_percent(stats.inserted - stats.deleted, prior) if prior > 0 else None
    modified = round_percent(stats.inserted, stats.total_lines_after) if stats.total_lines_after > 0 else None
    return Summary(
        size_change_percent=size_change,
        modified_lines_percent=modified,
        total_lines=stats.total_lines_after,
        all_new=prior == 0,
    )


def format_signed_percent(value: int) -> str:
    """'+4%', '-12%', or '0%'."""
    if value == 0:
        return "0%"
    return f"{value:+d}%"


def format_summary(summary: Summary) -> str:
    """Render a summary as one line, e.g.
    'Size change: +4% Modified lines: 4% (622 lines total)'."""
    if summary.binary:
        return "binary file, no line statistics"

    parts = []
    if summary.size_change_percent is not None:
        parts.append(f"Size change: {format_signed_percent(summary.size_change_percent)}")
    if summary.modified_lines_percent is not None:
        parts.append(f"Modified lines: {summary.modified_lines_percent}%")

    noun = "line" if summary.total_lines == 1 else "lines"
    detail = f"{summary.total_lines} {noun} total"
    if summary.all_new:
        detail += ", all new"
    parts.append(f"({detail})")
    return " ".join(parts)
