"""
CLI entry point.

Usage:
    python -m wopi_proof --help
"""
import sys

from wopi_proof.cli import main

if __name__ == "__main__":
    sys.exit(main())
