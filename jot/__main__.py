"""Allow ``python -m jot``."""

from jot.cli import main

if __name__ == "__main__":
    main()
