import sys

from SmallShell.shell import main

if __name__ == "__main__":
    sys.exit(main())
