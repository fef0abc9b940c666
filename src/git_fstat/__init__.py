"""git-fstat: show the version-control status of a single file in git."""
