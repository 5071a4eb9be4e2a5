#!/usr/bin/env python3
"""
accucalc.py - Accumulator calculator with memory register and operation history.
Main CLI entry point for all accucalc operations.
"""

import argparse
import logging
import sys

from calc_bridge import CalculatorBridge, HOST_ERRORS
from calc_config import load_env, load_config
from calc_session import CalcSession
from calc_utils import compound_interest, format_number, percentage

VERSION = "1.0.0"


def show_usage():
    """Show comprehensive usage information."""
    print(f"""accucalc v{VERSION} - Accumulator calculator with memory and history

USAGE:
  accucalc [commands...] [options]            # Run commands on one calculator
  accucalc                                    # Interactive prompt (or read stdin)
  accucalc --percentage VALUE PERCENT
  accucalc --compound PRINCIPAL RATE YEARS N
  accucalc --factorial N

COMMANDS (one per argument, quote commands with operands):
  12  -4  3.5          Type a number into the display
  +  -  *  /  =        Keypad operators
  "add 5" "div 2"      Operator with operand, applied immediately
  sqrt  sq  "pow 3"    Square root, square, power of the display value
  fact                 Factorial of the display value
  ms  mr  mc  m+       Memory store, recall, clear, add
  mem                  Show memory
  c  ch                Clear value, clear history
  history              Last entries, most recent first
  "pct V P"            Percentage
  "ci P R Y N"         Compound interest

OPTIONS:
  --history-json       Print calculator history as JSON after the commands
  -q                   Quiet mode.

ENVIRONMENT (.env is loaded from the current or script directory):
  CALC_DEBUG=true      Debug logging
  CALC_HISTORY_LIMIT   Entries shown by 'history' (default 5)
  CALC_PROMPT          Interactive prompt (default 'calc> ')

EXAMPLES:
  accucalc 10 + 5 = "mul 2"                   # 30
  accucalc "pct 200 10"                       # 20
  accucalc --compound 1000 5 10 12            # 1647.00949769028...
""")


def configure_logging(debug: bool):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s (%(levelname)s): %(message)s",
        stream=sys.stderr,
    )


def build_parser():
    parser = argparse.ArgumentParser(
        description=f"accucalc v{VERSION} - Accumulator calculator with memory and history",
        formatter_class=argparse.RawTextHelpFormatter,
        add_help=False  # We'll add custom help
    )

    parser.add_argument('commands', nargs='*',
                        help="Calculator commands, executed in order")

    # One-shot utilities (mutually exclusive)
    action_group = parser.add_mutually_exclusive_group()
    action_group.add_argument('--percentage', nargs=2, type=float, metavar=('VALUE', 'PERCENT'),
                              help='Print PERCENT percent of VALUE')
    action_group.add_argument('--compound', nargs=4, type=float,
                              metavar=('PRINCIPAL', 'RATE', 'YEARS', 'N'),
                              help='Print compound interest future value')
    action_group.add_argument('--factorial', type=int, metavar='N',
                              help='Print N! (N <= 20)')

    parser.add_argument('--history-json', action='store_true',
                        help='Print calculator history as JSON after the commands')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Suppress informational messages')
    parser.add_argument('-h', '--help', action='store_true',
                        help='Show this help message')
    parser.add_argument('--version', action='store_true',
                        help='Show version information')
    return parser


def main(argv=None):
    # Initialize environment
    load_env()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.help:
        show_usage()
        return 0

    if args.version:
        print(f"accucalc v{VERSION}")
        return 0

    config = load_config(args.quiet)
    configure_logging(config.debug)

    try:
        if args.percentage is not None:
            print(format_number(percentage(*args.percentage)))
            return 0
        if args.compound is not None:
            print(format_number(compound_interest(*args.compound)))
            return 0
        if args.factorial is not None:
            print(CalculatorBridge.factorial(args.factorial))
            return 0

        return execute_session(args, config)

    except HOST_ERRORS as e:
        print(f"accucalc: Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print(f"\naccucalc: Operation cancelled by user", file=sys.stderr)
        return 1


def execute_session(args, config):
    """Run commands from argv, stdin or an interactive prompt against one session."""
    session = CalcSession(history_limit=config.history_limit, quiet=config.quiet)

    if args.commands:
        status = run_commands(session, args.commands)
    elif sys.stdin.isatty():
        status = run_interactive(session, config.prompt)
    else:
        status = run_commands(session, (line.strip() for line in sys.stdin))

    if args.history_json:
        print(session.bridge.history_json(indent=2))
    return status


def run_commands(session, commands):
    status = 0
    for command in commands:
        if not command:
            continue
        try:
            print(session.run_command(command))
        except ValueError as e:
            print(f"accucalc: Error: {e}", file=sys.stderr)
            status = 1
    return status


def run_interactive(session, prompt):
    if not session.quiet:
        print(f"accucalc v{VERSION} - type 'quit' to exit", file=sys.stderr)
    while True:
        try:
            line = input(prompt)
        except EOFError:
            print()
            return 0
        if line.strip().lower() in ('quit', 'exit', 'q'):
            return 0
        try:
            print(session.run_command(line))
        except ValueError as e:
            print(f"accucalc: Error: {e}", file=sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
