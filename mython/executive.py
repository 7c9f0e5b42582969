"""
The overall control for running a whole program.
"""
from typing import Optional, TextIO, Union
from .parser import parse_program
from .runtime import Context, ENV
from .evaluator import execute
from . import syntax

def run_program(program:syntax.Program, context:Context, env:Optional[ENV]=None) -> ENV:
	""" Run the top level of a parsed program. Answer the global environment it leaves behind. """
	env = {} if env is None else env
	execute(program.body, env, context)
	return env

def run_text(text:Union[str, TextIO], output:Optional[TextIO]=None) -> ENV:
	return run_program(parse_program(text), Context(output))
