"""Command-line interface."""
import sys

from forcelayout.main import main

if __name__ == "__main__":
    sys.exit(main())
