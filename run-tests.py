#!/usr/bin/env python3
"""
Runs the boxknife test suite. The optional argument restricts the run to test modules whose file
name contains it, for example `run-tests.py hexcodec`.
"""
import argparse
import pathlib
import sys
import unittest


def main() -> int:
    argp = argparse.ArgumentParser(description=__doc__)
    argp.add_argument('filter', nargs='?', default='', help='only run test modules whose name contains this')
    argp.add_argument('-q', '--quiet', action='store_true', help='only report failures')
    args = argp.parse_args()
    root = pathlib.Path(__file__).parent.absolute()
    pattern = F'test_*{args.filter.strip("*")}*.py'
    suite = unittest.defaultTestLoader.discover(str(root / 'test'), pattern, top_level_dir=str(root))
    runner = unittest.TextTestRunner(verbosity=1 if args.quiet else 2)
    return 0 if runner.run(suite).wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(main())
