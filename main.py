"""Time logs billing: prints billable amount, hours and days per project."""

import sys

from hours_parser.cli import main

# >>>>> GO!

if __name__ == "__main__":
    sys.exit(main(sys.argv))
