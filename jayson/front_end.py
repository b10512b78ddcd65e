"""
Turn a file (or an already-decoded JSON document) into a Program, or else explain why not.

Two shapes of document are acceptable. Either the whole thing is a list of operations,
or else it looks like {"program": {"variables": ..., "functions": ..., "main": [...]}}.
Both come out the other end as the same kind of Program.

Each operation is an object keyed by the name of the operation.
Operands are scalars, or else objects keyed by the name of an expression-operation.
"""
import json
import math
from pathlib import Path
from typing import Any, Optional
from . import syntax
from .diagnostics import Report, MalformedProgram

# The older vocabulary spelled some things differently.
SYNONYMS = {
	"greaterThan": "greater_than",
	"lessThan": "less_than",
	"eq": "equals",
}

def load_file(path:Path, report:Report) -> Optional[syntax.Program]:
	report.info("Loading", path)
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
		return None
	except (OSError, UnicodeDecodeError) as ex:
		report.broken_file(path, ex)
		return None
	return load_text(text, path, report)

def _reject_constant(token:str):
	# NaN and Infinity are not JSON, whatever the json module thinks.
	raise ValueError("%s is not a number in JSON."%token)

def load_text(text:str, path:Optional[Path], report:Report) -> Optional[syntax.Program]:
	try: document = json.loads(text, parse_constant=_reject_constant)
	except json.JSONDecodeError as ex:
		report.bad_json(path, text, ex)
		return None
	except ValueError as ex:
		report.bad_json_value(path, ex)
		return None
	except RecursionError:
		report.nested_too_deep(path)
		return None
	return load_document(document, report, source_path=path)

def load_document(document:Any, report:Report, source_path:Optional[Path]=None) -> Optional[syntax.Program]:
	try: program = normalize(document)
	except MalformedProgram as ex:
		report.malformed(ex)
		return None
	except RecursionError:
		report.nested_too_deep(source_path)
		return None
	program.source_path = source_path
	report.info("Loaded %d top-level operation(s) and %d function(s)"%(len(program.main), len(program.functions)))
	return program

def normalize(document:Any) -> syntax.Program:
	if isinstance(document, list):
		return syntax.Program({}, syntax.FunctionTable(), _sequence(document, "main"))
	if isinstance(document, dict) and list(document) == ["program"]:
		return _program_section(document["program"], "program")
	raise MalformedProgram("document", "Expected a list of operations, or an object with only a 'program' key.")

def _program_section(section, where:str) -> syntax.Program:
	_expect(dict, section, where, "an object")
	extra = sorted(set(section) - {"variables", "functions", "main"})
	if extra:
		raise MalformedProgram(where, "Unexpected key(s): %s."%", ".join(map(repr, extra)))
	variables_section = _expect(dict, section.get("variables", {}), where+".variables", "an object")
	variables = {
		name: _scalar(value, "%s.variables.%s"%(where, name))
		for name, value in variables_section.items()
	}
	functions_section = _expect(dict, section.get("functions", {}), where+".functions", "an object")
	functions = syntax.FunctionTable([
		_function(name, dfn, "%s.functions.%s"%(where, name))
		for name, dfn in functions_section.items()
	])
	main = _sequence(_field(section, "main", where), where+".main")
	return syntax.Program(variables, functions, main)

def _function(name:str, dfn, where:str) -> syntax.FunctionDef:
	_expect(dict, dfn, where, "an object with 'parameters' and 'body'")
	params = _expect(list, dfn.get("parameters", []), where+".parameters", "a list of names")
	for i, p in enumerate(params):
		_name(p, "%s.parameters[%d]"%(where, i))
	if len(set(params)) != len(params):
		raise MalformedProgram(where+".parameters", "The same name appears twice.")
	body = _sequence(_field(dfn, "body", where), where+".body")
	return syntax.FunctionDef(name, tuple(params), body)

###############################################################################

def _expect(kind:type, value, where:str, noun:str):
	if not isinstance(value, kind):
		raise MalformedProgram(where, "Expected %s, got %s."%(noun, json.dumps(value)))
	return value

def _field(payload:dict, key:str, where:str):
	try: return payload[key]
	except KeyError: raise MalformedProgram(where, "Missing %r."%key) from None

def _name(value, where:str) -> str:
	if not (isinstance(value, str) and value):
		raise MalformedProgram(where, "Expected a variable name, got %s."%json.dumps(value))
	return value

def _scalar(value, where:str):
	if value is None or isinstance(value, (bool, str)): return value
	if isinstance(value, (int, float)):
		try: number = float(value)
		except OverflowError: number = math.inf
		if math.isfinite(number): return number
		raise MalformedProgram(where, "That number is out of range.")
	raise MalformedProgram(where, "Expected a number, string, true, false or null.")

def _sequence(items, where:str) -> list[syntax.Node]:
	_expect(list, items, where, "a list of operations")
	ops = []
	for i, item in enumerate(items):
		ops.extend(_statement(item, "%s[%d]"%(where, i)))
	return ops

def _statement(item, where:str):
	_expect(dict, item, where, "an operation")
	if not item:
		raise MalformedProgram(where, "An operation needs a key to say what it is.")
	for key, payload in item.items():
		here = "%s.%s"%(where, key)
		name = SYNONYMS.get(key, key)
		if name in STATEMENT:
			yield STATEMENT[name](name, payload, here)
		elif name in EXPRESSION:
			yield EXPRESSION[name](name, payload, here)
		else:
			yield syntax.Unknown(key, here)

def _operand(node, where:str) -> syntax.OPERAND:
	if isinstance(node, dict):
		if len(node) != 1:
			raise MalformedProgram(where, "An operand object must have exactly one key.")
		(key, payload), = node.items()
		here = "%s.%s"%(where, key)
		if key == "literal":
			return syntax.Literal(_scalar(payload, here), here)
		name = SYNONYMS.get(key, key)
		if name in EXPRESSION:
			return EXPRESSION[name](name, payload, here)
		if name in STATEMENT:
			raise MalformedProgram(where, "%r does not produce a value, so it cannot be an operand."%key)
		raise MalformedProgram(where, "Unknown operation %r."%key)
	if isinstance(node, list):
		raise MalformedProgram(where, "A list cannot be an operand.")
	return _scalar(node, where)

def _pair(payload, where:str):
	if not (isinstance(payload, list) and len(payload) == 2):
		raise MalformedProgram(where, "Expected a list of exactly two operands.")
	return _operand(payload[0], where+"[0]"), _operand(payload[1], where+"[1]")

###############################################################################

def _arithmetic(op, payload, where):
	return syntax.Arithmetic(op, *_pair(payload, where), where)

def _comparison(op, payload, where):
	return syntax.Comparison(op, *_pair(payload, where), where)

def _logical(op, payload, where):
	return syntax.Logical(op, *_pair(payload, where), where)

def _not(op, payload, where):
	return syntax.Not(_operand(payload, where), where)

EXPRESSION = {
	"add": _arithmetic,
	"subtract": _arithmetic,
	"multiply": _arithmetic,
	"divide": _arithmetic,
	"equals": _comparison,
	"greater_than": _comparison,
	"less_than": _comparison,
	"and": _logical,
	"or": _logical,
	"not": _not,
}

def _binding(payload, where):
	_expect(dict, payload, where, "an object with 'var' and 'value'")
	name = _name(_field(payload, "var", where), where+".var")
	return name, _operand(_field(payload, "value", where), where+".value")

def _declare(op, payload, where):
	return syntax.Declare(*_binding(payload, where), where)

def _assign(op, payload, where):
	return syntax.Assign(*_binding(payload, where), where)

def _arithmetic_statement(op, payload, where):
	if isinstance(payload, dict):
		return syntax.Update(op, *_binding(payload, where), where)
	return _arithmetic(op, payload, where)

def _print(op, payload, where):
	if isinstance(payload, list):
		return syntax.Print([_operand(p, "%s[%d]"%(where, i)) for i, p in enumerate(payload)], where)
	return syntax.Print([_operand(payload, where)], where)

def _if(op, payload, where):
	_expect(dict, payload, where, "an object with 'condition' and 'then'")
	condition = _operand(_field(payload, "condition", where), where+".condition")
	then_part = _sequence(_field(payload, "then", where), where+".then")
	else_part = _sequence(payload.get("else", []), where+".else")
	return syntax.If(condition, then_part, else_part, where)

def _loop(op, payload, where):
	_expect(dict, payload, where, "an object with 'times' and 'body'")
	key = "count" if "count" in payload and "times" not in payload else "times"
	times = _operand(_field(payload, key, where), "%s.%s"%(where, key))
	return syntax.Loop(times, _sequence(_field(payload, "body", where), where+".body"), where)

def _while(op, payload, where):
	_expect(dict, payload, where, "an object with 'condition' and 'body'")
	condition = _operand(_field(payload, "condition", where), where+".condition")
	return syntax.While(condition, _sequence(_field(payload, "body", where), where+".body"), where)

def _call(op, payload, where):
	_expect(dict, payload, where, "an object with 'function' and 'arguments'")
	function = _name(_field(payload, "function", where), where+".function")
	arguments = _expect(list, payload.get("arguments", []), where+".arguments", "a list of operands")
	return syntax.Call(function, [_operand(a, "%s.arguments[%d]"%(where, i)) for i, a in enumerate(arguments)], where)

STATEMENT = {
	"declare": _declare,
	"assign": _assign,
	"add": _arithmetic_statement,
	"subtract": _arithmetic_statement,
	"multiply": _arithmetic_statement,
	"divide": _arithmetic_statement,
	"print": _print,
	"if": _if,
	"loop": _loop,
	"while": _while,
	"call": _call,
}
