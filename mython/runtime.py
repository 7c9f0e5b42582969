"""
The run-time model: what values are, how they compare, how they print,
and how a method call finds its method.

Basic primitive values play themselves: numbers are Python int, strings
are str, and flags are bool. The absence of a value is None. Classes and
their instances need a little more help, so they get classes here.

A method's receiver is bound by plain reference, so "sharing" an instance
with the method that runs against it can never leave anything dangling.
"""
import sys
from io import StringIO
from typing import NamedTuple, Optional, Sequence, TextIO, Union, Any

class MythonRuntimeError(RuntimeError):
	""" Anything that goes wrong while a program runs. """
	pass

SELF = "self"
INIT_METHOD = "__init__"
STR_METHOD = "__str__"
EQ_METHOD = "__eq__"
LT_METHOD = "__lt__"
ADD_METHOD = "__add__"

VALUE = Union[None, bool, int, str, "Class", "Instance"]
ENV = dict[str, VALUE]

class Context:
	"""
	The part of the outside world a running program can see:
	somewhere to print, and the name the next new instance will be bound under.
	"""
	pending_name: Optional[str]

	def __init__(self, output:Optional[TextIO]=None):
		self.output = sys.stdout if output is None else output
		self.pending_name = None

class Method(NamedTuple):
	name: str
	formal_params: Sequence[str]   # Not including self.
	body: Any   # A statement; see syntax.py.

	def arity(self) -> int: return len(self.formal_params)

class Class:
	"""
	Name, methods, and maybe a parent. Instances refer back here.
	The parser makes a class as soon as it reads the header, and
	defines the methods once it has read them all.
	"""
	def __init__(self, name:str, methods:Sequence[Method]=(), parent:Optional["Class"]=None):
		self.name = name
		self.parent = parent
		self.define(methods)

	def define(self, methods:Sequence[Method]):
		self.methods = tuple(methods)
		self._vtable = {(m.name, m.arity()):m for m in self.methods}

	def __repr__(self): return "<class %s>" % self.name

	def get_method(self, name:str, arity:int) -> Optional[Method]:
		""" Dispatch is by exact name and arity, first here and then up the parent chain. """
		try: return self._vtable[name, arity]
		except KeyError:
			if self.parent is None: return None
			return self.parent.get_method(name, arity)

class Instance:
	def __init__(self, cls:Class):
		self.cls = cls
		self.fields: ENV = {}

	def __repr__(self): return "<%s object at %#x>" % (self.cls.name, id(self))

	def has_method(self, name:str, arity:int) -> bool:
		return self.cls.get_method(name, arity) is not None

	def call(self, name:str, args:Sequence[VALUE], context:Context) -> VALUE:
		method = self.cls.get_method(name, len(args))
		if method is None:
			pattern = "Method %s.%s taking %d argument(s) not found"
			raise MythonRuntimeError(pattern % (self.cls.name, name, len(args)))
		frame = {SELF: self}
		frame.update(zip(method.formal_params, args))
		from .evaluator import execute
		return execute(method.body, frame, context)

###############################################################################

def is_number(value:VALUE) -> bool:
	# bool is a subclass of int, but True is not a number here.
	return type(value) is int

def is_true(value:VALUE) -> bool:
	if value is None: return False
	if isinstance(value, (bool, int, str)): return bool(value)
	# Classes and instances are always true.
	return True

_NATIVE = (bool, int, str)

def _native_pair(lhs:VALUE, rhs:VALUE) -> bool:
	return any(type(lhs) is kind and type(rhs) is kind for kind in _NATIVE)

def equal(lhs:VALUE, rhs:VALUE, context:Context) -> bool:
	if _native_pair(lhs, rhs): return lhs == rhs
	if isinstance(lhs, Instance) and lhs.has_method(EQ_METHOD, 1):
		return is_true(lhs.call(EQ_METHOD, (rhs,), context))
	if lhs is None and rhs is None: return True
	raise MythonRuntimeError("Cannot compare objects for equality")

def less(lhs:VALUE, rhs:VALUE, context:Context) -> bool:
	if _native_pair(lhs, rhs): return lhs < rhs
	if isinstance(lhs, Instance) and lhs.has_method(LT_METHOD, 1):
		return is_true(lhs.call(LT_METHOD, (rhs,), context))
	raise MythonRuntimeError("Cannot compare objects for less")

# The rest assume a total order.

def not_equal(lhs:VALUE, rhs:VALUE, context:Context) -> bool:
	return not equal(lhs, rhs, context)

def greater(lhs:VALUE, rhs:VALUE, context:Context) -> bool:
	return not (less(lhs, rhs, context) or equal(lhs, rhs, context))

def less_or_equal(lhs:VALUE, rhs:VALUE, context:Context) -> bool:
	return not greater(lhs, rhs, context)

def greater_or_equal(lhs:VALUE, rhs:VALUE, context:Context) -> bool:
	return not less(lhs, rhs, context)

###############################################################################

def render(value:VALUE, stream:TextIO, context:Context):
	""" Write the display form of a value. An instance may speak for itself with __str__. """
	if value is None:
		stream.write("None")
	elif type(value) is bool:
		stream.write("True" if value else "False")
	elif isinstance(value, (int, str)):
		stream.write(str(value))
	elif isinstance(value, Class):
		stream.write("Class " + value.name)
	elif isinstance(value, Instance):
		if value.has_method(STR_METHOD, 0):
			render(value.call(STR_METHOD, (), context), stream, context)
		else:
			stream.write(repr(value))
	else:
		assert False, type(value)

def stringify(value:VALUE, context:Context) -> str:
	buffer = StringIO()
	render(value, buffer, context)
	return buffer.getvalue()
