"""History enrichment: creation date, last-modified date, top contributor."""

from dataclasses import dataclass

from git_fstat.git_helpers import UnexpectedOutputError
from git_fstat.utils import log

RENAME_WARNING = "rename history is ambiguous, showing the date under the current name"


@dataclass(frozen=True)
class History:
    created: str | None
    created_warning: str | None
    last_modified: str | None
    top_contributor: str | None
    contributor_commits: int
    total_commits: int


def rank_contributors(names: list[str]) -> list[tuple[str, int]]:
    """Rank author names by commit count, highest first.

    Pure function. Equal counts come out in alphabetical order: the list is
    sorted by name first, then stable-sorted by count.
    """
    counts: dict[str, int] = {}
    for name in names:
        counts[name] = counts.get(name, 0) + 1
    return sorted(sorted(counts.items()), key=lambda item: item[1], reverse=True)


def lookup_creation_date(git, name: str) -> tuple[str | None, str | None]:
    """Return (creation date, warning).

    Follows renames first. When that reports more than one add, retries on
    the current name only and returns a warning with the result.
    """
    dates = git.creation_dates(name, follow=True)
    if len(dates) <= 1:
        return (dates[0] if dates else None), None

    log(f"--follow found {len(dates)} adds for {name}, retrying without it", style="yellow")
    dates = git.creation_dates(name, follow=False)
    if len(dates) > 1:
        raise UnexpectedOutputError(f"Expected one creation commit for {name}, got {len(dates)}")
    return (dates[0] if dates else None), RENAME_WARNING


def lookup_history(git, name: str) -> History:
    created, warning = lookup_creation_date(git, name)
    last_modified = git.last_modified_date(name)

    authors = git.author_names(name)
    ranking = rank_contributors(authors)
    top_name, top_count = ranking[0] if ranking else (None, 0)

    return History(
        created=created,
        created_warning=warning,
        last_modified=last_modified,
        top_contributor=top_name,
        contributor_commits=top_count,
        total_commits=len(authors),
    )
