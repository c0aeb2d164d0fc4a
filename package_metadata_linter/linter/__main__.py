"""Module entrypoint for `python -m package_metadata_linter.linter`.

Delegates to the linter CLI implementation.
"""

from .run_lint import main


if __name__ == "__main__":
    main()
