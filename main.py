import sys

from qoidec.cli import main

if __name__ == "__main__":
    sys.exit(main())
