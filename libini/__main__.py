import sys

from libini.main import main

if __name__ == "__main__":
    sys.exit(main())
