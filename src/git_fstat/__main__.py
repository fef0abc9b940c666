"""Entry point for `python -m git_fstat`."""

from git_fstat.cli import main

if __name__ == "__main__":
    main()
