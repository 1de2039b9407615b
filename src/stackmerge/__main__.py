import sys

from stackmerge.commands import main

if __name__ == "__main__":
    sys.exit(main())
