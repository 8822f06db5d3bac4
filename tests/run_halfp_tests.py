#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterator, List, Optional
import unittest


def _flatten(suite: unittest.TestSuite) -> Iterator[unittest.TestCase]:
    for item in suite:
        if isinstance(item, unittest.TestSuite):
            yield from _flatten(item)
        else:
            yield item


def _discover(start_dir: Path, pattern: str) -> List[unittest.TestCase]:
    loader = unittest.TestLoader()
    suite = loader.discover(start_dir=str(start_dir), pattern=pattern, top_level_dir=str(start_dir))
    return list(_flatten(suite))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run halfp tests")
    parser.add_argument("--list", action="store_true", help="List test ids and exit")
    parser.add_argument("--filter", help="Only run test ids containing this substring")
    parser.add_argument("--pattern", default="test_*.py", help="Test module glob")
    parser.add_argument("--failfast", action="store_true", help="Stop on first failure")
    parser.add_argument("-q", "--quiet", action="store_true", help="Print only the summary")
    args = parser.parse_args(argv)

    tests = _discover(Path(__file__).resolve().parent, args.pattern)
    if args.filter:
        tests = [test for test in tests if args.filter in test.id()]
        if not tests:
            print(f"error: no tests match filter '{args.filter}'", file=sys.stderr)
            return 1

    if args.list:
        for test in tests:
            print(test.id())
        return 0

    runner = unittest.TextTestRunner(verbosity=1 if args.quiet else 2, failfast=args.failfast)
    result = runner.run(unittest.TestSuite(tests))
    return 0 if result.wasSuccessful() else 1


if __name__ == "__main__":
    raise SystemExit(main())
