import sys

from ghforks.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
