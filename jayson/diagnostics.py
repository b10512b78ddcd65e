"""
Everything about things going wrong: the exceptions the interpreter raises,
and the Report which collects complaints and eventually shows them to a human.

Two kinds of trouble exist. Fatal trouble stops the run; it arrives here
either as an exception or as a complaint about the input file.
Survivable trouble (assigning to a variable nobody declared, or an operation
nobody has heard of) gets noted and the program carries on regardless.
"""
import sys, random
from pathlib import Path
from typing import Any, Optional, Sequence
from json import JSONDecodeError
from boozetools.support.failureprone import SourceText, illustration


class JaysonError(Exception):
	pass

class MalformedProgram(JaysonError):
	""" The document does not have the shape of a program. """
	def __init__(self, where:str, message:str):
		super().__init__(where, message)
		self.where = where
		self.message = message
	def __str__(self): return "%s: %s"%(self.where, self.message)


class JaysonRuntimeError(JaysonError):
	"""
	Fatal trouble during evaluation.
	The evaluator pins the offending operation (the innermost one) to the exception
	on its way out, along with the stack of calls that led there.
	"""
	site: Any = None
	trace: Optional[Sequence] = None

	def __init__(self, message:str):
		super().__init__(message)
		self.message = message

	def blame(self, site, trace):
		if self.site is None:
			self.site = site
			self.trace = tuple(trace)

class UndefinedVariable(JaysonRuntimeError):
	def __init__(self, name:str):
		super().__init__("There is no variable called %r."%name)
		self.name = name

class UndefinedFunction(JaysonRuntimeError):
	def __init__(self, name:str):
		super().__init__("There is no function called %r."%name)
		self.name = name

class ArityMismatch(JaysonRuntimeError):
	def __init__(self, name:str, need:int, got:int):
		plural = '' if need == 1 else 's'
		super().__init__("Function %r takes %d argument%s, but got %d instead."%(name, need, plural, got))
		self.need, self.got = need, got

class DivisionByZero(JaysonRuntimeError):
	def __init__(self):
		super().__init__("Division by zero.")

class TypeMismatch(JaysonRuntimeError):
	pass

class NegativeCount(JaysonRuntimeError):
	def __init__(self, count):
		super().__init__("A loop cannot repeat %s times."%count)
		self.count = count

class StepLimitExceeded(JaysonRuntimeError):
	def __init__(self, limit:int):
		super().__init__("Gave up after %d steps. Is there a loop that never ends?"%limit)
		self.limit = limit


def _outburst():
	particle = ["Oh, ", "Well, ", "Hmm. ", "", ""]
	grumbles = ['Bother', 'Drat', 'Nuts', 'Rats', 'Blast', 'Phooey', 'Good grief', 'Oh dear']
	resignations = [
		'The program cannot go on.',
		'That is as far as it goes.',
		'Here is what went wrong:',
	]
	return "%s%s! %s"%tuple(map(random.choice, (particle, grumbles, resignations)))


class Annotation:
	""" Points at one node of the document, via its breadcrumb. """
	def __init__(self, node, caption:str=""):
		self.where = node.where
		self.caption = caption
	def illustrate(self):
		if self.caption: return "    at %s: %s"%(self.where, self.caption)
		else: return "    at %s"%self.where

class Pic:
	def __init__(self, intro:str, anns:list, footer=(), *, fatal=True, kind:str=None):
		self._intro, self._anns, self._footer = intro, anns, footer
		self.fatal, self.kind = fatal, kind
	@property
	def description(self): return self._intro
	def as_text(self):
		lines = [self._intro]
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)


class Report:
	"""
	Collects complaints. With live=True, each one goes straight to
	the console as it arrives, which keeps warnings in step with the
	program's own output. Otherwise they wait for complain_to_console().
	"""
	issues : list[Pic]

	def __init__(self, *, verbose:int=0, live:bool=False):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._live = live
		self.issues = []

	def ok(self): return not any(i.fatal for i in self.issues)
	def sick(self): return not self.ok()

	def issue(self, it:Pic):
		self.issues.append(it)
		if self._live:
			_bemoan([it])

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self.issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self.issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the loader calls:

	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called %s"%path, [], kind="FileNotFound"))

	def broken_file(self, path:Path, ex:Exception):
		intro = "Something went pear-shaped while trying to read %s"%path
		self.issue(Pic(intro, [], [str(ex)], kind="BrokenFile"))

	def bad_json(self, path:Optional[Path], text:str, ex:JSONDecodeError):
		intro = "This is not valid JSON (line %d, column %d): %s"%(ex.lineno, ex.colno, ex.msg)
		source = SourceText(text, filename=str(path)) if path else SourceText(text)
		row, col = source.find_row_col(ex.pos)
		single_line = source.line_of_text(row)
		picture = illustration(single_line, col, 1, prefix='% 6d |' % row, caption=ex.msg)
		footer = [str(path)] if path else []
		self.issue(Pic(intro, [], footer + [picture], kind="InvalidJSON"))

	def bad_json_value(self, path:Optional[Path], ex:ValueError):
		footer = [str(path)] if path else []
		self.issue(Pic("This is not valid JSON: %s"%ex, [], footer, kind="InvalidJSON"))

	def nested_too_deep(self, path:Optional[Path]):
		intro = "This document is nested deeper than the interpreter can follow."
		footer = [str(path)] if path else []
		self.issue(Pic(intro, [], footer, kind="NestedTooDeep"))

	def malformed(self, ex:MalformedProgram):
		intro = "This document does not have the shape of a JAYSON program."
		self.issue(Pic(intro, [], ["    at %s: %s"%(ex.where, ex.message)], kind="MalformedProgram"))

	# Methods the evaluator calls when it decides to carry on:

	def undeclared_assignment(self, op):
		intro = "Variable %r was never declared, so it cannot be changed."%op.name
		self.issue(Pic(intro, [Annotation(op)], fatal=False, kind="UndeclaredAssignment"))

	def unknown_operation(self, op):
		intro = "Unknown operation %r; skipping it."%op.key
		self.issue(Pic(intro, [Annotation(op)], fatal=False, kind="UnknownOperation"))

	# Methods the executive calls when it cannot carry on:

	def runtime_error(self, ex:JaysonRuntimeError):
		problem = [Annotation(ex.site, type(ex).__name__)] if ex.site is not None else []
		problem.extend(Annotation(call, "called from here") for call in reversed(ex.trace or ()))
		self.issue(Pic(ex.message, problem, kind=type(ex).__name__))

	def too_deep(self):
		intro = "Function calls nested deeper than the interpreter can follow."
		footer = ["That usually means a function calls itself without ever stopping."]
		self.issue(Pic(intro, [], footer, kind="TooDeep"))


def _bemoan(issues):
	""" Emit some issues to the console. """
	if any(i.fatal for i in issues):
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		if i.fatal: print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
