import sys

from credprovider.cli import main

if __name__ == "__main__":
    sys.exit(main())
