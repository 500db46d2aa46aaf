"""CLI: python -m sxl <program.sxl>"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .report import format_error, to_diagnostic
from .runner import run
from .types import DEFAULT_MAX_DEPTH, DEFAULT_MAX_INDIRECTION, Limits


def main(argv=None):
    parser = argparse.ArgumentParser(prog="sxl", description="Evaluate an SXL source file.")
    parser.add_argument("path", help="source file to evaluate")
    parser.add_argument("--json", action="store_true",
                        help="print results and diagnostics as one JSON document")
    parser.add_argument("--max-gas", type=int, default=None,
                        help="node visits allowed per top-level form (default: unmetered)")
    parser.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
                        help="maximum nesting of lists and definitions")
    parser.add_argument("--max-indirection", type=int, default=DEFAULT_MAX_INDIRECTION,
                        help="identifier-to-identifier hops allowed per lookup")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        source = Path(args.path).read_bytes()
    except OSError as e:
        print(f"Fatal: cannot read {args.path}: {e}", file=sys.stderr)
        return 2

    result = run(source, limits=Limits(
        max_gas=args.max_gas,
        max_depth=args.max_depth,
        max_indirection=args.max_indirection,
    ))

    if args.json:
        doc = {
            "results": result.results,
            "diagnostics": [to_diagnostic(source, err) for err in result.errors],
        }
        print(json.dumps(doc, indent=2))
    else:
        for text in result.results:
            print(text)
        for err in result.errors:
            print(format_error(source, err), file=sys.stderr)

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
