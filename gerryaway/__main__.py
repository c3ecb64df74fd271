import sys

from gerryaway.cli import main

if __name__ == "__main__":
    sys.exit(main())
