"""
lanemap CLI

Command-line interface with subcommands for layout inspection.
"""

import argparse
import sys
from .cli import layout, ticks


def main():
    parser = argparse.ArgumentParser(
        prog='lanemap',
        description='lanemap: Lane packing, scale ticks and region slicing for linear genomic maps'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Add subcommand parsers
    layout.add_parser(subparsers)
    ticks.add_parser(subparsers)

    # Parse arguments
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute the appropriate subcommand
    if args.command == 'layout':
        layout.run(args)
    elif args.command == 'ticks':
        ticks.run(args)


if __name__ == "__main__":
    main()
