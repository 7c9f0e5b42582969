import sys, random
from pathlib import Path
from typing import Any, Optional, Sequence
from boozetools.support.failureprone import SourceText, illustration

from .lexer import LexicalError, Token, VALUED, STRING
from .parser import MythonParseError
from .runtime import MythonRuntimeError

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott",
		'Jeepers', 'Heavens', "Mercy", 'Nuts', 'Rats',
	]

	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects what went wrong with a run, and tells the console about it. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:Optional[int]=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []

	@property
	def issues(self) -> Sequence["Pic"]: return tuple(self._issues)

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the driver calls when loading a file:

	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called "+str(path), []))

	def broken_file(self, path:Path, cause:Exception):
		intro = "Something went pear-shaped while trying to read "+str(path)
		self.issue(Pic(intro, [], [str(cause)]))

	# Methods for each kind of failure the interpreter proper can raise:

	def lexical_error(self, path, text:str, ex:LexicalError):
		intro = "Mython could not make sense of the text here."
		self.issue(Pic(intro, _annotate(path, text, ex.offset, 1, ex.message)))

	def parse_error(self, path, text:str, ex:MythonParseError):
		intro = "Mython got confused by %r." % ex.token
		width = _token_width(text, ex.token)
		self.issue(Pic(intro, _annotate(path, text, ex.token.offset, width, ex.message)))

	def runtime_error(self, ex:MythonRuntimeError):
		self.issue(Pic("The program stopped with a run-time error:", [], ["    "+str(ex)]))

def _token_width(text:str, token:Token) -> int:
	if token.offset is None or token.offset >= len(text): return 1
	if token.kind in VALUED and token.kind != STRING: return max(1, len(str(token.value)))
	return 1

def _annotate(path, text:str, offset:Optional[int], width:int, caption:str) -> list["Annotation"]:
	if offset is None or not text: return []
	# Eof sits one past the end, but it still belongs to the last line.
	offset = min(offset, len(text) - 1)
	return [Annotation(path, SourceText(text, filename=str(path)), offset, width, caption)]

class Annotation:
	def __init__(self, path, source:SourceText, offset:int, width:int=1, caption:str=""):
		self.path = path
		self.source = source
		self.offset = offset
		self.width = width
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.offset)
		single_line = self.source.line_of_text(row)
		return illustration(single_line, col, self.width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def intro(self): return self._intro
	def as_text(self):
		lines = [self._intro, ""]
		path = None
		for ann in self._anns:
			if ann.path != path:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
