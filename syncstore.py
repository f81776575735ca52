# Command line entry point for inspecting and editing store files
import sys

from syncstore_lib.cli import main

if __name__ == "__main__":
    sys.exit(main())
