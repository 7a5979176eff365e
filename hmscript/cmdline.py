"""
This is an interpreter for the hmscript language.

For example:

    hmscript

will run program.hm from the current directory, if possible, or else try to explain why not.

    hmscript -v other.hm

will run other.hm instead, and say what it's up to along the way.
"""
import sys, argparse
from pathlib import Path

DEFAULT_PROGRAM = "program.hm"

parser = argparse.ArgumentParser(
	prog="hmscript",
	description="Interpreter for the hmscript language.",
	epilog=__doc__.strip(),
	formatter_class=argparse.RawDescriptionHelpFormatter,
)
parser.add_argument("program", nargs="?", default=DEFAULT_PROGRAM, help="defaults to %s in the current directory."%DEFAULT_PROGRAM)
parser.add_argument('-v', "--verbose", action="count", help="Trace loading and skipped lines on standard error.")

def run(args) -> int:
	from .diagnostics import Report, Trap
	from .loader import load_program
	from .executive import run_program
	report = Report(verbose=args.verbose)
	program = load_program(Path.cwd() / args.program, report)
	if program is not None:
		try: run_program(program, report)
		except Trap as trap: report.trap(trap)
	if report.sick():
		report.complain_to_console()
		return 1
	return 0

def main(argv=None):
	sys.exit(run(parser.parse_args(argv)))
