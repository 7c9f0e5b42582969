"""
From text to a statement tree and a class table, by way of the grammar in Mython.md.

A class must be defined before anything inherits from it, and before anything
outside its own body instantiates it. Method bodies come wrapped in MethodBody,
which is where `return` comes to rest; the grammar allows `return` nowhere else.
A leading `self` parameter is implicit and dropped: `def f(self, x)` and
`def f(x)` both take one argument.
"""
from typing import Union, TextIO
from boozetools.macroparse.runtime import TypicalApplication
from boozetools.parsing.interface import ParseError, SemanticError, END_OF_TOKENS
from . import syntax, runtime
from .lexer import (
	TABLES, ScanRules, Token,
	NONE, TRUE, FALSE, EQ, NOT_EQ, LESS_OR_EQ, GREATER_OR_EQ, EOF,
)

class MythonParseError(ParseError):
	def __init__(self, message:str, token:Token):
		super().__init__(message, token)
		self.message, self.token = message, token
	def __str__(self): return "%s (found %r)" % (self.message, self.token)

class MythonSemanticError(MythonParseError, SemanticError):
	""" Noticed while reducing a rule, so booze-tools must let it pass through untouched. """
	pass

STRINGIFY = "str"

COMPARATORS = {
	EQ: runtime.equal,
	NOT_EQ: runtime.not_equal,
	LESS_OR_EQ: runtime.less_or_equal,
	GREATER_OR_EQ: runtime.greater_or_equal,
	"<": runtime.less,
	">": runtime.greater,
}
LITERALS = {TRUE: True, FALSE: False, NONE: None}

def _names(tokens) -> list[str]: return [t.value for t in tokens]

class MythonParser(ScanRules, TypicalApplication):
	classes: dict[str, runtime.Class]

	def parse(self, text:str, *, filename=None) -> syntax.Program:
		self.classes = {}
		return super().parse(self.begin(text), filename=filename)

	@staticmethod
	def parse_nothing(): return None
	@staticmethod
	def parse_empty(): return []
	@staticmethod
	def parse_first(item): return [item]
	@staticmethod
	def parse_more(some, another):
		some.append(another)
		return some

	@staticmethod
	def default_parse(ctor, *args):
		return getattr(syntax, ctor)(*args)

	def parse_module(self, items):
		return syntax.Program(syntax.Compound(items), self.classes)

	def _known_class(self, token:Token) -> runtime.Class:
		try: return self.classes[token.value]
		except KeyError: raise MythonSemanticError("Expected the name of a class defined above", token) from None

	def parse_superclass(self, name:Token): return self._known_class(name)

	def mid_rule_class_header(self, name:Token, parent):
		# Known from here on, so the class's own methods can instantiate it.
		cls = self.classes[name.value] = runtime.Class(name.value, (), parent)
		return cls

	@staticmethod
	def parse_class_def(name:Token, parent, cls:runtime.Class, methods):
		cls.define(methods)
		return syntax.ClassDefinition(cls)

	@staticmethod
	def parse_method(name:Token, params, body:syntax.Compound):
		params = _names(params)
		if params[:1] == [runtime.SELF]: del params[0]
		return runtime.Method(name.value, params, syntax.MethodBody(body))

	@staticmethod
	def parse_assign(path, rv):
		*path, name = _names(path)
		if path: return syntax.FieldAssignment(syntax.VariableValue(path), name, rv)
		return syntax.Assignment(name, rv)

	@staticmethod
	def parse_return_nothing(): return syntax.Return(syntax.Constant(None))

	@staticmethod
	def parse_compare(lhs, op:Token, rhs):
		return syntax.Comparison(COMPARATORS[op.terminal()], lhs, rhs)

	@staticmethod
	def parse_negate(operand): return syntax.Sub(syntax.Constant(0), operand)

	@staticmethod
	def parse_variable(path): return syntax.VariableValue(_names(path))

	@staticmethod
	def parse_call_on_path(path, method:Token, args):
		return syntax.MethodCall(syntax.VariableValue(_names(path)), method.value, args)

	@staticmethod
	def parse_method_call(receiver, method:Token, args):
		return syntax.MethodCall(receiver, method.value, args)

	@staticmethod
	def parse_constant(token:Token): return syntax.Constant(token.value)

	@staticmethod
	def parse_literal(token:Token): return syntax.Constant(LITERALS[token.kind])

	def parse_construct(self, name:Token, args):
		if name.value == STRINGIFY:
			if len(args) != 1: raise MythonSemanticError("Expected exactly one argument to str()", name)
			return syntax.Stringify(args[0])
		return syntax.NewInstance(self._known_class(name), args)

	def unexpected_token(self, kind, semantic, pds):
		token = semantic if kind != END_OF_TOKENS else Token(EOF, offset=self.end)
		expected = self.expected_tokens(pds)
		if len(expected) == 1: message = "Expected %s" % expected[0]
		else: message = "Expected one of %s" % " ".join(expected)
		raise MythonParseError(message, token)

mython_parser = MythonParser(TABLES)

def parse_program(source:Union[str, TextIO]) -> syntax.Program:
	text = source if isinstance(source, str) else source.read()
	return mython_parser.parse(text)
