"""
Group Gradebook launcher: runs the gradebook CLI from a source checkout.

Usage: python main.py [--config=PATH] [--now=DATETIME] [--no-save] [--verbose]
"""

import sys

from gradebook.cli import main

if __name__ == "__main__":
    sys.exit(main())
