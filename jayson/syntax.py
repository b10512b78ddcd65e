"""
The set of operation nodes in simple form.
The loader builds these from a decoded JSON document; after that, nobody changes them.

Operands are either bare scalars (a string names a variable; anything else is itself)
or else nodes which compute a value. Every node remembers where in the document it came from.
"""
from pathlib import Path
from typing import Any, Optional, Sequence, NamedTuple, Union
from .diagnostics import UndefinedFunction

class Node:
	where: str
	def __repr__(self): return "<%s @ %s>"%(type(self).__name__, self.where)

class Expression(Node):
	""" Something that can stand in for an operand. """

OPERAND = Union[str, float, bool, None, Expression]

class Literal(Expression):
	def __init__(self, value, where:str):
		self.value, self.where = value, where

class BinaryOp(Expression):
	def __init__(self, op:str, lhs:OPERAND, rhs:OPERAND, where:str):
		self.op, self.lhs, self.rhs, self.where = op, lhs, rhs, where

class Arithmetic(BinaryOp): pass
class Comparison(BinaryOp): pass
class Logical(BinaryOp): pass

class Not(Expression):
	def __init__(self, arg:OPERAND, where:str):
		self.arg, self.where = arg, where

class Declare(Node):
	def __init__(self, name:str, value:OPERAND, where:str):
		self.name, self.value, self.where = name, value, where

class Assign(Node):
	def __init__(self, name:str, value:OPERAND, where:str):
		self.name, self.value, self.where = name, value, where

class Update(Node):
	""" Arithmetic in place, as in {"add": {"var": "x", "value": 1}} """
	def __init__(self, op:str, name:str, value:OPERAND, where:str):
		self.op, self.name, self.value, self.where = op, name, value, where

class Print(Node):
	def __init__(self, items:Sequence[OPERAND], where:str):
		self.items, self.where = items, where

class If(Node):
	def __init__(self, condition:OPERAND, then_part:Sequence[Node], else_part:Sequence[Node], where:str):
		self.condition, self.then_part, self.else_part, self.where = condition, then_part, else_part, where

class Loop(Node):
	def __init__(self, times:OPERAND, body:Sequence[Node], where:str):
		self.times, self.body, self.where = times, body, where

class While(Node):
	def __init__(self, condition:OPERAND, body:Sequence[Node], where:str):
		self.condition, self.body, self.where = condition, body, where

class Call(Node):
	def __init__(self, function:str, arguments:Sequence[OPERAND], where:str):
		self.function, self.arguments, self.where = function, arguments, where

class Unknown(Node):
	""" Whatever the loader did not recognize. Evaluating one just complains. """
	def __init__(self, key:str, where:str):
		self.key, self.where = key, where


class FunctionDef(NamedTuple):
	name: str
	params: tuple[str, ...]
	body: Sequence[Node]

class FunctionTable:
	def __init__(self, definitions:Sequence[FunctionDef]=()):
		self._definitions = {fn.name: fn for fn in definitions}
	def __len__(self): return len(self._definitions)
	def lookup(self, name:str) -> FunctionDef:
		try: return self._definitions[name]
		except KeyError: raise UndefinedFunction(name) from None

class Program:
	source_path: Optional[Path] = None
	def __init__(self, variables:dict[str, Any], functions:FunctionTable, main:Sequence[Node]):
		self.variables = variables
		self.functions = functions
		self.main = main
