"""
**********************************************************************************
* Title: main.py
*
* Metadata:
* @version 1.0.0
* -------------------------------------------------------------------------------
* Description:
* The command-line entry point of the Star Battle solver. It loads a puzzle
* from a plain text file (default 'input.txt') or an SBN string, prints the
* empty board, runs the brute-force search and prints either the solved board
* or a "no solution" message together with the time taken. It can also solve
* a whole file of SBN puzzles in batch mode, cross-check the result with Z3
* and write a detailed search trace to a debug log.
*
**********************************************************************************
"""
# main.py
# Description: argparse command line for the solver.

# --- IMPORTS AND LOGGING ---
import sys
import argparse
import logging

from starbattle.constants import DEFAULT_INPUT_FILE, DEFAULT_DEBUG_LOG
from starbattle.grid import ConstructionError, layout_warnings
from starbattle.puzzle_handler import load_puzzle_file, decode_sbn, encode_to_sbn, FileAccessError
from starbattle.solver import SearchEngine, trace_logger
from starbattle.display import grid_to_string, display_grid_as_symbols, format_duration
from starbattle.validation import find_violations
from starbattle.z3_solver import cross_check
from starbattle.batch import read_sbn_lines, solve_sbn_batch

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="A command-line Star Battle solver.")
    parser.add_argument("input", nargs="?", default=DEFAULT_INPUT_FILE,
                        help=f"Plain text puzzle file (default: {DEFAULT_INPUT_FILE}).")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--sbn", type=str, help="Solve a Star Battle Notation (SBN) string instead of a file.")
    source.add_argument("--batch", type=str, metavar="PATH",
                        help="Solve every SBN line of a file, or of all files in a directory.")
    parser.add_argument("--color", action="store_true", help="Also show a coloured view of the regions.")
    parser.add_argument("--cross-check", action="store_true",
                        help="Confirm the result with the Z3 solver and report uniqueness.")
    parser.add_argument("--debug", action="store_true", help="Write a verbose search trace to the debug log.")
    parser.add_argument("--log-file", type=str, default=DEFAULT_DEBUG_LOG,
                        help=f"Debug log path used with --debug (default: {DEFAULT_DEBUG_LOG}).")
    return parser.parse_args(argv)


def _run_batch(path):
    try:
        lines = read_sbn_lines(path)
    except FileAccessError as e:
        print(e, file=sys.stderr)
        return 1

    report = solve_sbn_batch(lines)
    print("\n" + "=" * 40)
    print("              BATCH COMPLETE")
    print("=" * 40)
    print(f"Puzzles:    {len(report.entries)}")
    print(f"Solved:     {report.solved}")
    print(f"Unsolvable: {report.unsolvable}")
    print(f"Malformed:  {report.malformed}")
    print(f"(Search time {format_duration(sum(entry.elapsed for entry in report.entries))})")
    return 0


def _run_single(args):
    try:
        model = decode_sbn(args.sbn) if args.sbn else load_puzzle_file(args.input)
    except FileAccessError as e:
        print(e, file=sys.stderr)
        return 1
    except ConstructionError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    for warning in layout_warnings(model):
        logging.warning(f"Layout: {warning}")
    sbn = encode_to_sbn(model)
    if sbn:
        logging.info(f"SBN: {sbn}")

    print("Input Grid:")
    print(grid_to_string(model))
    if args.color:
        print(display_grid_as_symbols(model))
    print("Starting Solve:")

    engine = SearchEngine(model)
    result = engine.solve()

    if result is None:
        print("No solution found")
    else:
        print(grid_to_string(model, result))
        if args.color:
            print(display_grid_as_symbols(model, result, title="--- Solution ---"))
        violations = find_violations(model, result.star_positions)
        for violation in violations:
            logging.error(f"Solution check failed: {violation}")
    print(f"(Search completed in {format_duration(engine.elapsed)})")

    if args.cross_check:
        agrees, z3_count = cross_check(model, result)
        if not agrees:
            print("Z3 cross-check: DISAGREES with the search result")
        elif result is None:
            print("Z3 cross-check: agrees, no solution exists")
        elif z3_count == 1:
            print("Z3 cross-check: agrees, the solution is unique")
        else:
            print("Z3 cross-check: agrees, multiple solutions exist")
    return 0


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    debug_handler = None
    if args.debug:
        try:
            debug_handler = logging.FileHandler(args.log_file, mode='w', encoding='utf-8')
        except OSError as e:
            print(f"Error: Could not open {args.log_file} for writing: {e}", file=sys.stderr)
            return 1
        debug_handler.setFormatter(logging.Formatter('%(message)s'))
        trace_logger.addHandler(debug_handler)
        trace_logger.setLevel(logging.DEBUG)
        trace_logger.propagate = False
        print(f"Debug mode enabled. Logging to {args.log_file}")

    try:
        if args.batch:
            return _run_batch(args.batch)
        return _run_single(args)
    finally:
        if debug_handler is not None:
            trace_logger.removeHandler(debug_handler)
            trace_logger.setLevel(logging.NOTSET)
            trace_logger.propagate = True
            debug_handler.close()


if __name__ == "__main__":
    sys.exit(main())
