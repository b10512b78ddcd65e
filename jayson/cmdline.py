"""
This is an interpreter for the JAYSON programming language,
in which programs are written as JSON documents.

{0}

For example:

    jayson program.jayson

will run program.jayson if possible, or else try to explain why not.

    jayson -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

EXTENSION = ".jayson"

parser = argparse.ArgumentParser(
	prog="jayson",
	description="Interpreter for the JAYSON programming language.",
)
parser.add_argument("program", help="path to a %s file, e.g. examples/countdown.jayson"%EXTENSION)
parser.add_argument('-c', "--check", action="store_true", help="Load and check the program but do not actually execute it.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what is going on. Repeat for emphasis.")
parser.add_argument("--max-steps", type=int, metavar="N", help="Give up after evaluating N operations.")

def run(args) -> int:
	from .diagnostics import Report
	from .front_end import load_file
	if not args.program.endswith(EXTENSION):
		print("The program must be a %s file; %s is not."%(EXTENSION, args.program), file=sys.stderr)
		return 1
	report = Report(verbose=args.verbose, live=True)
	program = load_file(Path(args.program), report)
	if program is None:
		return 1
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
		return 0
	from .executive import run_program
	run_program(program, report, max_steps=args.max_steps)
	return 1 if report.sick() else 0

def main(argv=None) -> int:
	argv = sys.argv[1:] if argv is None else argv
	if argv:
		return run(parser.parse_args(argv))
	else:
		print(__doc__.strip().format(parser.format_usage()), file=sys.stderr)
		return 1
