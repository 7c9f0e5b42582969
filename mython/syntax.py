"""
The closed set of statement-tree nodes.
The parser builds these; the evaluator executes them. They carry no behavior of their own.
Class-level type annotations are there to keep the IDE honest about fields.
"""
from typing import Callable, NamedTuple, Optional, Sequence, Union
from .runtime import Class, Context, VALUE

COMPARATOR = Callable[[VALUE, VALUE, Context], bool]

class Statement:
	""" Root of every node kind the evaluator knows how to execute. """
	def __repr__(self): return "<%s>" % type(self).__name__

class Constant(Statement):
	def __init__(self, value:VALUE): self.value = value
	def __repr__(self): return "<Constant %r>" % (self.value,)

class VariableValue(Statement):
	""" A name, or a dotted chain of names like `a.b.c`. """
	dotted_ids: tuple[str, ...]
	def __init__(self, dotted_ids:Union[str, Sequence[str]]):
		if isinstance(dotted_ids, str): dotted_ids = dotted_ids.split(".")
		assert dotted_ids, "A variable needs a name"
		self.dotted_ids = tuple(dotted_ids)
	def name(self) -> str: return ".".join(self.dotted_ids)
	def __repr__(self): return "<VariableValue %s>" % self.name()

class Assignment(Statement):
	def __init__(self, name:str, rv:Statement):
		self.name, self.rv = name, rv

class FieldAssignment(Statement):
	""" object.field_name = rv, where object is a variable holding an instance """
	def __init__(self, object:VariableValue, field_name:str, rv:Statement):
		assert isinstance(object, VariableValue), object
		self.object, self.field_name, self.rv = object, field_name, rv

class Print(Statement):
	def __init__(self, args:Sequence[Statement]=()):
		self.args = list(args)

class MethodCall(Statement):
	def __init__(self, object:Statement, method:str, args:Sequence[Statement]=()):
		self.object, self.method, self.args = object, method, list(args)

class Stringify(Statement):
	def __init__(self, argument:Statement): self.argument = argument

class Not(Statement):
	def __init__(self, argument:Statement): self.argument = argument

class BinaryOperation(Statement):
	def __init__(self, lhs:Statement, rhs:Statement):
		self.lhs, self.rhs = lhs, rhs

class Add(BinaryOperation): pass
class Sub(BinaryOperation): pass
class Mult(BinaryOperation): pass
class Div(BinaryOperation): pass

# Both sides of these get evaluated, always.
class Or(BinaryOperation): pass
class And(BinaryOperation): pass

class Comparison(BinaryOperation):
	def __init__(self, comparator:COMPARATOR, lhs:Statement, rhs:Statement):
		super().__init__(lhs, rhs)
		self.comparator = comparator

class Compound(Statement):
	def __init__(self, statements:Sequence[Statement]=()):
		self.statements = list(statements)

class Return(Statement):
	def __init__(self, statement:Statement): self.statement = statement

class MethodBody(Statement):
	""" The one place a Return comes to rest. """
	def __init__(self, body:Statement): self.body = body

class ClassDefinition(Statement):
	def __init__(self, cls:Class): self.cls = cls
	def __repr__(self): return "<ClassDefinition %s>" % self.cls.name

class IfElse(Statement):
	def __init__(self, condition:Statement, if_body:Statement, else_body:Optional[Statement]=None):
		self.condition, self.if_body, self.else_body = condition, if_body, else_body

class NewInstance(Statement):
	def __init__(self, cls:Class, args:Sequence[Statement]=()):
		self.cls, self.args = cls, list(args)
	def __repr__(self): return "<NewInstance %s>" % self.cls.name

class Program(NamedTuple):
	body: Compound
	classes: dict[str, Class]
