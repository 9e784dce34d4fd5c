#!/usr/bin/env python3
from sitegen.cli import main

if __name__ == "__main__":
    main()
