import sys

from cosmos_getting_started.main import main

if __name__ == "__main__":
    sys.exit(main())
