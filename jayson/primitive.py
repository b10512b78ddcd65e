"""
The primitive values, and the operators that act upon them.

Values are plain Python: numbers are float, flags are bool, strings are str,
and null is None. Keep in mind that bool is a kind of int in Python,
so kind_of() must ask about flags before numbers.
"""
import math
import operator
from .diagnostics import TypeMismatch, DivisionByZero, NegativeCount

NUMBER = "number"
STRING = "string"
FLAG = "flag"
NULL = "null"

def kind_of(value) -> str:
	if value is None: return NULL
	if isinstance(value, bool): return FLAG
	if isinstance(value, (int, float)): return NUMBER
	if isinstance(value, str): return STRING
	raise TypeError(value)

def display(value) -> str:
	""" The way print shows a value. """
	kind = kind_of(value)
	if kind == NUMBER:
		if abs(value) < 1e21 and value == int(value): return str(int(value))
		return repr(float(value))
	if kind == FLAG: return "true" if value else "false"
	if kind == NULL: return "null"
	return value

def _require(kind:str, value, role:str):
	if kind_of(value) != kind:
		raise TypeMismatch("The %s must be a %s, not the %s %s."%(role, kind, kind_of(value), display(value)))
	return value

def _divide(a, b):
	if b == 0: raise DivisionByZero()
	return a / b

ARITHMETIC = {
	"add" : operator.add,
	"subtract" : operator.sub,
	"multiply" : operator.mul,
	"divide" : _divide,
}
ORDERING = {
	"greater_than" : operator.gt,
	"less_than" : operator.lt,
}
LOGICAL = {
	"and" : lambda a, b: a and b,
	"or" : lambda a, b: a or b,
}

def arithmetic(op:str, a, b) -> float:
	_require(NUMBER, a, "left side of %s"%op)
	_require(NUMBER, b, "right side of %s"%op)
	return float(ARITHMETIC[op](a, b))

def compare(op:str, a, b) -> bool:
	if op == "equals":
		ka, kb = kind_of(a), kind_of(b)
		if ka != kb and NULL not in (ka, kb):
			raise TypeMismatch("Cannot compare the %s %s with the %s %s."%(ka, display(a), kb, display(b)))
		return a == b
	_require(NUMBER, a, "left side of %s"%op)
	_require(NUMBER, b, "right side of %s"%op)
	return ORDERING[op](a, b)

def logical(op:str, a, b) -> bool:
	_require(FLAG, a, "left side of %s"%op)
	_require(FLAG, b, "right side of %s"%op)
	return LOGICAL[op](a, b)

def negate(a) -> bool:
	return not _require(FLAG, a, "operand of not")

def condition(value) -> bool:
	return _require(FLAG, value, "condition")

def repetitions(value) -> int:
	_require(NUMBER, value, "number of times to loop")
	if not (math.isfinite(value) and value == int(value)):
		raise TypeMismatch("A loop must repeat a whole number of times, not %s."%display(value))
	if value < 0: raise NegativeCount(display(value))
	return int(value)
