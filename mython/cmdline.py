"""
This is an interpreter for the Mython programming language.

{0}

For example:

    mython program.my

will run program.my if possible, or else try to explain why not.

    mython -

will read the program from standard input instead.

    mython -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="mython",
	description="Interpreter for the Mython programming language.",
)
parser.add_argument("program", nargs="?", default="-", help="try examples/shapes.my for example; '-' reads standard input.")
parser.add_argument('-v', "--verbose", action="count", help="Report progress on the standard error stream.")
parser.add_argument('-c', "--check", action="store_true", help="Lex and parse the program but do not actually execute it.")
parser.add_argument('-t', "--tokens", action="store_true", help="Print the token stream, one token per line, instead of running.")

def run(args, output=None, report=None) -> int:
	from .diagnostics import Report
	from .lexer import LexicalError, tokenize
	from .parser import MythonParseError, parse_program
	from .runtime import Context, MythonRuntimeError
	from .executive import run_program
	if report is None: report = Report(verbose=args.verbose)
	output = sys.stdout if output is None else output
	path, text = _load(args.program, report)
	if report.sick():
		report.complain_to_console()
		return 1
	try:
		if args.tokens:
			for token in tokenize(text):
				print(token, file=output)
			return 0
		report.info("Parsing", path)
		program = parse_program(text)
		report.info("Classes:", ", ".join(program.classes) or "(none)")
		if args.check:
			print("Looks plausible to me.", file=sys.stderr)
			return 0
		report.info("Running", path)
		run_program(program, Context(output))
	except LexicalError as ex:
		report.lexical_error(path, text, ex)
	except MythonParseError as ex:
		report.parse_error(path, text, ex)
	except MythonRuntimeError as ex:
		report.runtime_error(ex)
	if report.sick():
		report.complain_to_console()
		return 1
	return 0

def _load(program:str, report):
	if program == "-":
		return "<stdin>", sys.stdin.read()
	path = Path.cwd() / program
	try:
		with open(path, "r", encoding="utf-8") as fh:
			return path, fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
	except OSError as ex:
		report.broken_file(path, ex)
	return path, ""

def main():
	if len(sys.argv) > 1:
		sys.exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
