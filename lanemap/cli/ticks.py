"""Ticks subcommand - print the tick plan for a domain"""

from argparse import ArgumentParser, Namespace, _SubParsersAction
import logging

from ..config import ScaleConfig
from ..scale import ScaleModel
from ..ticks import TickPlanner

logger = logging.getLogger(__name__)


def add_parser(subparsers: _SubParsersAction) -> ArgumentParser:
    """Add ticks subcommand parser"""
    parser = subparsers.add_parser(
        'ticks',
        help='Show major/minor tick intervals for a coordinate domain'
    )
    parser.add_argument('--min', type=float, default=0, help='Domain start (default: 0)')
    parser.add_argument('--max', type=float, required=True, help='Domain end')
    parser.add_argument('--width', type=int, default=760, help='Chart width in pixels (default: 760)')
    parser.add_argument('--label-buffer', type=int, default=10,
                        help='Space between tick labels in pixels (default: 10)')
    parser.add_argument('--no-prettify', action='store_true',
                        help='Keep the domain instead of widening it to major ticks')
    return parser  # type: ignore[no-any-return]


def run(args: Namespace) -> None:
    """Execute ticks subcommand"""
    logging.basicConfig(level=logging.INFO, format='%(levelname)s - %(message)s', force=True)

    scale = ScaleModel(args.min, args.max, args.width)
    planner = TickPlanner(ScaleConfig(label_buffer=args.label_buffer))
    plan = planner.plan(scale)
    if not args.no_prettify:
        scale.prettify_domain(plan.major_size)

    majors = [m.label for m in planner.marks(scale, plan) if m.kind == 'major']
    print(f"domain\t{planner.label(scale.min)}-{planner.label(scale.max)}")
    print(f"major\t{plan.major_size}")
    print(f"minor\t{plan.minor_size}")
    print(f"labels\t{' '.join(majors)}")
