"""
Tokens, and the indentation-aware scanner that produces them.

The patterns live in Mython.md alongside the grammar; booze-tools compiles
them into the same automaton the parser uses. The scan actions here turn
matches into tokens. Leading spaces on a line become Indent and Dedent
tokens, one per two-space level, so the parser only ever sees single-level
changes in nesting.

Lexer wraps the token stream in a current/next interface for anyone who
wants the tokens without a parse.
"""
from pathlib import Path
from typing import Optional, TextIO, Union

from boozetools.macroparse.runtime import make_tables, MacroScanBindings
from boozetools.macroparse.expansion import CompactDFA, scan_actions
from boozetools.scanning.engine import IterableScanner

class LexicalError(Exception):
	""" Bad indentation or a malformed string literal. """
	def __init__(self, message:str, offset:Optional[int]=None):
		super().__init__(message, offset)
		self.message, self.offset = message, offset
	def __str__(self): return self.message

# Token kinds. Each kind is also the display name of its tokens,
# and (except for Char) the name of its terminal in the grammar.
CLASS, RETURN, IF, ELSE, DEF, PRINT = "Class", "Return", "If", "Else", "Def", "Print"
AND, OR, NOT, NONE, TRUE, FALSE = "And", "Or", "Not", "None", "True", "False"
ID, NUMBER, STRING, CHAR = "Id", "Number", "String", "Char"
EQ, NOT_EQ, LESS_OR_EQ, GREATER_OR_EQ = "Eq", "NotEq", "LessOrEq", "GreaterOrEq"
INDENT, DEDENT, NEWLINE, EOF = "Indent", "Dedent", "Newline", "Eof"

KEYWORDS = {
	"class": CLASS, "return": RETURN, "if": IF, "else": ELSE, "def": DEF, "print": PRINT,
	"and": AND, "or": OR, "not": NOT, "None": NONE, "True": TRUE, "False": FALSE,
}

COMPARISONS = {"==": EQ, "!=": NOT_EQ, "<=": LESS_OR_EQ, ">=": GREATER_OR_EQ}

VALUED = frozenset([ID, NUMBER, STRING, CHAR])

ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "'": "'", "\\": "\\"}

INDENT_WIDTH = 2

TABLES = make_tables(Path(__file__).parent/"Mython.md")
DFA = CompactDFA(dfa=TABLES['scanner']['dfa'], alphabet=TABLES['scanner']['alphabet'])

class Token:
	"""
	A tagged value. Equality looks at the kind and payload only:
	the offset is there for error messages, not for identity.
	"""
	__slots__ = ("kind", "value", "offset")

	def __init__(self, kind:str, value=None, offset:Optional[int]=None):
		self.kind, self.value, self.offset = kind, value, offset

	def __eq__(self, other):
		if not isinstance(other, Token): return NotImplemented
		return self.kind == other.kind and self.value == other.value

	def __hash__(self): return hash((self.kind, self.value))

	def __repr__(self):
		if self.kind in VALUED: return "%s{%s}" % (self.kind, self.value)
		return self.kind

	def terminal(self) -> str:
		""" What the grammar calls this token. Punctuation goes by its own character. """
		return self.value if self.kind == CHAR else self.kind

def Id(text:str) -> Token: return Token(ID, text)
def Number(value:int) -> Token: return Token(NUMBER, value)
def String(text:str) -> Token: return Token(STRING, text)
def Char(char:str) -> Token: return Token(CHAR, char)


class ScanRules:
	"""
	The scan actions named in Mython.md, along with the little bit of state
	that indentation needs. Call `begin` before each new text.
	"""
	_depth: int
	_line_open: bool
	_size: int
	end: int   # Where Eof sits, in the text as given.

	def begin(self, text:str) -> str:
		""" Reset for a new text. Answers the text as it should be scanned, with a final line break. """
		self._depth, self._line_open, self.end = 0, False, len(text)
		if not text.endswith("\n"): text += "\n"
		self._size = len(text)
		return text

	def _emit(self, yy:IterableScanner, token:Token):
		self._line_open = True
		yy.token(token.terminal(), token)

	def scan_ignore(self, yy:IterableScanner): pass

	def scan_indentation(self, yy:IterableScanner):
		"""
		A line break, any dull lines after it, and the leading spaces of the next real line.
		Compare the new depth with the current one and say so with Indent or Dedent tokens.
		"""
		if self._line_open:
			yy.token(NEWLINE, Token(NEWLINE, offset=yy.left))
			self._line_open = False
		if yy.right >= self._size: depth = 0
		else:
			text = yy.match()
			depth = len(text) - len(text.rstrip(" "))
			if depth % INDENT_WIDTH: raise LexicalError("bad indent size", yy.right - depth)
		kind = INDENT if depth > self._depth else DEDENT
		for _ in range(abs(depth - self._depth) // INDENT_WIDTH):
			yy.token(kind, Token(kind, offset=yy.right))
		self._depth = depth

	def scan_number(self, yy:IterableScanner):
		self._emit(yy, Token(NUMBER, int(yy.match()), yy.left))

	def scan_word(self, yy:IterableScanner):
		word = yy.match()
		if word in KEYWORDS: self._emit(yy, Token(KEYWORDS[word], offset=yy.left))
		else: self._emit(yy, Token(ID, word, yy.left))

	def scan_string(self, yy:IterableScanner):
		text = yy.match()
		chars = []
		escaped = False
		for i, ch in enumerate(text[1:-1], 1):
			if escaped:
				try: chars.append(ESCAPES[ch])
				except KeyError: raise LexicalError("unrecognized escape sequence \\" + ch, yy.left + i - 1) from None
				escaped = False
			elif ch == "\\": escaped = True
			else: chars.append(ch)
		self._emit(yy, Token(STRING, "".join(chars), yy.left))

	def scan_unterminated(self, yy:IterableScanner):
		if yy.right >= self.end: raise LexicalError("unterminated string literal", yy.left)
		raise LexicalError("end of line inside a string literal", yy.left)

	def scan_comparison(self, yy:IterableScanner):
		self._emit(yy, Token(COMPARISONS[yy.match()], offset=yy.left))

	def scan_punctuation(self, yy:IterableScanner):
		self._emit(yy, Token(CHAR, yy.match(), yy.left))


class Lexer:
	"""
	Produces tokens on demand. The first token is ready as soon as
	the lexer is constructed; once Eof arrives, it stays put.
	"""
	def __init__(self, source:Union[str, TextIO]):
		text = source if isinstance(source, str) else source.read()
		rules = ScanRules()
		text = rules.begin(text)
		bindings = MacroScanBindings(rules, scan_actions(TABLES['scanner']['action']))
		self._stream = iter(IterableScanner(text, DFA, bindings))
		self._eof = Token(EOF, offset=rules.end)
		self._current = None
		self.next_token()

	def current_token(self) -> Token:
		return self._current

	def next_token(self) -> Token:
		if self._current is not self._eof:
			try: _, self._current = next(self._stream)
			except StopIteration: self._current = self._eof
		return self._current


def tokenize(source:Union[str, TextIO]) -> list[Token]:
	""" The whole token stream, up to and including Eof. """
	lexer = Lexer(source)
	tokens = [lexer.current_token()]
	while tokens[-1].kind != EOF:
		tokens.append(lexer.next_token())
	return tokens
