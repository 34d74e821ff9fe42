"""case-combinator CLI entry point.

This module enables running the CLI as:
    python -m case_combinator <command>
"""

from case_combinator.cli import main

if __name__ == "__main__":
    main()
