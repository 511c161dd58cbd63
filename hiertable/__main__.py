'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

import sys
import argparse

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="HierTable hierarchy viewer / editor")
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="JSON record file to open at start-up."
    )
    parser.add_argument(
        "--verbosity",
        type=int, default=0,
        help="Set verbosity level (0=quiet, 1=normal, 2=verbose, 3+=debug)"
    )
    parser.add_argument(
        "--stdexp",
        action="store_true",
        help="Use standard exception handling to stdout / stderr."
    )
    return parser.parse_args(argv)

def run(argv=None):
    args = parse_args(argv)

    # wx is only needed once we actually open a window.
    from hiertable.app import main

    return main(path=args.path, verbosity=args.verbosity, stdexp=args.stdexp)

if __name__ == "__main__":
    sys.exit(run())
