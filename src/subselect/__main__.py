"""Allow running the CLI with ``python -m subselect``."""

from subselect.cli import main

if __name__ == "__main__":
    main()
