"""
The statement evaluator: one function per kind of node, found by the node's type.

Every evaluation function produces an outcome. Ordinarily that is Completed,
carrying the node's value. A Return statement produces Returning instead,
which Compound and IfElse pass straight up and MethodBody alone turns back
into Completed. Nothing else ever sees a Returning outcome: the public
entry point refuses one.
"""
import operator
from typing import NamedTuple, Union
from . import syntax
from .runtime import (
	VALUE, ENV, Context, Instance, MythonRuntimeError,
	INIT_METHOD, ADD_METHOD,
	is_number, is_true, render, stringify,
)

class Completed(NamedTuple):
	value: VALUE

class Returning(NamedTuple):
	value: VALUE

OUTCOME = Union[Completed, Returning]
NOTHING = Completed(None)

def execute(stmt:syntax.Statement, env:ENV, context:Context) -> VALUE:
	""" Run a statement for its value. """
	outcome = run(stmt, env, context)
	if isinstance(outcome, Returning):
		raise MythonRuntimeError("return outside of a method")
	return outcome.value

def run(stmt:syntax.Statement, env:ENV, context:Context) -> OUTCOME:
	assert isinstance(env, dict), type(env)
	try: fn = EVALUATE[type(stmt)]
	except KeyError: raise NotImplementedError(type(stmt), stmt)
	return fn(stmt, env, context)

EVALUATE = {}

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_exec_"):
			_t = _v.__annotations__["stmt"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v

###############################################################################

def _exec_constant(stmt:syntax.Constant, env:ENV, context:Context):
	return Completed(stmt.value)

def _exec_variable_value(stmt:syntax.VariableValue, env:ENV, context:Context):
	# Each step through an instance continues in that instance's fields.
	# A step through anything else keeps looking in the same place.
	scope, value = env, None
	for name in stmt.dotted_ids:
		try: value = scope[name]
		except KeyError: raise MythonRuntimeError("Unknown variable name: " + stmt.name()) from None
		if isinstance(value, Instance): scope = value.fields
	return Completed(value)

def _exec_assignment(stmt:syntax.Assignment, env:ENV, context:Context):
	# The slot keeps this name until the next assignment replaces it.
	context.pending_name = stmt.name
	value = env[stmt.name] = execute(stmt.rv, env, context)
	return Completed(value)

def _exec_field_assignment(stmt:syntax.FieldAssignment, env:ENV, context:Context):
	scope = env
	for name in stmt.object.dotted_ids:
		try: holder = scope[name]
		except KeyError: raise MythonRuntimeError("Unknown variable name: " + stmt.object.name()) from None
		if not isinstance(holder, Instance):
			raise MythonRuntimeError("%s is not an object, so it has no fields" % name)
		scope = holder.fields
	value = scope[stmt.field_name] = execute(stmt.rv, env, context)
	return Completed(value)

def _exec_print(stmt:syntax.Print, env:ENV, context:Context):
	out = context.output
	for index, arg in enumerate(stmt.args):
		value = execute(arg, env, context)
		if index: out.write(" ")
		render(value, out, context)
	out.write("\n")
	return NOTHING

def _exec_method_call(stmt:syntax.MethodCall, env:ENV, context:Context):
	# Calling a method the receiver does not have quietly yields None.
	receiver = execute(stmt.object, env, context)
	if isinstance(receiver, Instance) and receiver.has_method(stmt.method, len(stmt.args)):
		args = [execute(a, env, context) for a in stmt.args]
		return Completed(receiver.call(stmt.method, args, context))
	return NOTHING

def _exec_stringify(stmt:syntax.Stringify, env:ENV, context:Context):
	return Completed(stringify(execute(stmt.argument, env, context), context))

###############################################################################

def _operands(stmt:syntax.BinaryOperation, env:ENV, context:Context):
	return execute(stmt.lhs, env, context), execute(stmt.rhs, env, context)

def _divide(a:int, b:int) -> int:
	""" Integer division, truncating toward zero. """
	if b == 0: raise MythonRuntimeError("Division by zero")
	quotient = abs(a) // abs(b)
	return quotient if (a < 0) == (b < 0) else -quotient

def _arithmetic(stmt:syntax.BinaryOperation, env:ENV, context:Context, fn):
	lhs, rhs = _operands(stmt, env, context)
	if is_number(lhs) and is_number(rhs): return Completed(fn(lhs, rhs))
	raise MythonRuntimeError("Invalid arguments in " + type(stmt).__name__)

def _exec_add(stmt:syntax.Add, env:ENV, context:Context):
	lhs, rhs = _operands(stmt, env, context)
	if is_number(lhs) and is_number(rhs): return Completed(lhs + rhs)
	if type(lhs) is str and type(rhs) is str: return Completed(lhs + rhs)
	if isinstance(lhs, Instance) and lhs.has_method(ADD_METHOD, 1):
		return Completed(lhs.call(ADD_METHOD, (rhs,), context))
	raise MythonRuntimeError("Invalid arguments in Add")

def _exec_sub(stmt:syntax.Sub, env:ENV, context:Context):
	return _arithmetic(stmt, env, context, operator.sub)

def _exec_mult(stmt:syntax.Mult, env:ENV, context:Context):
	return _arithmetic(stmt, env, context, operator.mul)

def _exec_div(stmt:syntax.Div, env:ENV, context:Context):
	return _arithmetic(stmt, env, context, _divide)

def _logical(stmt:syntax.BinaryOperation, env:ENV, context:Context, fn):
	# No short-cut: the right side is evaluated no matter what the left side says.
	lhs, rhs = _operands(stmt, env, context)
	if lhs is None or rhs is None:
		raise MythonRuntimeError("Invalid arguments in " + type(stmt).__name__)
	return Completed(fn(is_true(lhs), is_true(rhs)))

def _exec_or(stmt:syntax.Or, env:ENV, context:Context):
	return _logical(stmt, env, context, operator.or_)

def _exec_and(stmt:syntax.And, env:ENV, context:Context):
	return _logical(stmt, env, context, operator.and_)

def _exec_not(stmt:syntax.Not, env:ENV, context:Context):
	value = execute(stmt.argument, env, context)
	if value is None: raise MythonRuntimeError("Invalid argument in Not")
	return Completed(not is_true(value))

def _exec_comparison(stmt:syntax.Comparison, env:ENV, context:Context):
	lhs, rhs = _operands(stmt, env, context)
	return Completed(stmt.comparator(lhs, rhs, context))

###############################################################################

def _exec_compound(stmt:syntax.Compound, env:ENV, context:Context):
	for each in stmt.statements:
		outcome = run(each, env, context)
		if isinstance(outcome, Returning): return outcome
	return NOTHING

def _exec_return(stmt:syntax.Return, env:ENV, context:Context):
	return Returning(execute(stmt.statement, env, context))

def _exec_method_body(stmt:syntax.MethodBody, env:ENV, context:Context):
	return Completed(run(stmt.body, env, context).value)

def _exec_class_definition(stmt:syntax.ClassDefinition, env:ENV, context:Context):
	env[stmt.cls.name] = stmt.cls
	return Completed(stmt.cls)

def _exec_if_else(stmt:syntax.IfElse, env:ENV, context:Context):
	if is_true(execute(stmt.condition, env, context)):
		return run(stmt.if_body, env, context)
	if stmt.else_body is not None:
		return run(stmt.else_body, env, context)
	return NOTHING

def _exec_new_instance(stmt:syntax.NewInstance, env:ENV, context:Context):
	# The bare instance is bound before any argument is evaluated,
	# so the initializer and the arguments can already see it by name.
	instance = Instance(stmt.cls)
	if context.pending_name is not None: env[context.pending_name] = instance
	if instance.has_method(INIT_METHOD, len(stmt.args)):
		args = [execute(a, env, context) for a in stmt.args]
		instance.call(INIT_METHOD, args, context)
	return Completed(instance)

attach_evaluation_methods(globals())
