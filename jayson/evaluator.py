"""
The tree-walking evaluator: one visit_* method per kind of operation.

Statements are visited for their effect; expressions are visited for their value.
Operands that are bare scalars never get visited. The environment resolves them directly.
"""
import sys
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax, primitive
from .diagnostics import Report, JaysonRuntimeError, ArityMismatch, StepLimitExceeded
from .environment import Environment

class Evaluator(Visitor):
	_calls: list[syntax.Call]

	def __init__(self, env:Environment, functions:syntax.FunctionTable, report:Report, *, out=None, max_steps:Optional[int]=None):
		self._env = env
		self._functions = functions
		self._report = report
		self._out = out
		self._max_steps = max_steps
		self._steps = 0
		self._calls = []

	def execute(self, op:syntax.Node):
		# Housekeeping around the generic visitation protocol
		# so that error messages point at the innermost culprit.
		try:
			self._tick()
			return self.visit(op)
		except JaysonRuntimeError as ex:
			ex.blame(op, self._calls)
			raise

	def _tick(self):
		self._steps += 1
		if self._max_steps is not None and self._steps > self._max_steps:
			raise StepLimitExceeded(self._max_steps)

	def tour(self, ops:Sequence[syntax.Node]) -> None:
		for op in ops: self.execute(op)

	def value_of(self, operand:syntax.OPERAND):
		if isinstance(operand, syntax.Node): return self.execute(operand)
		return self._env.resolve(operand)

	# Expressions

	@staticmethod
	def visit_Literal(expr:syntax.Literal):
		return expr.value

	def visit_Arithmetic(self, expr:syntax.Arithmetic):
		a = self.value_of(expr.lhs)
		b = self.value_of(expr.rhs)
		return primitive.arithmetic(expr.op, a, b)

	def visit_Comparison(self, expr:syntax.Comparison):
		a = self.value_of(expr.lhs)
		b = self.value_of(expr.rhs)
		return primitive.compare(expr.op, a, b)

	def visit_Logical(self, expr:syntax.Logical):
		# Both sides, always, left first.
		a = self.value_of(expr.lhs)
		b = self.value_of(expr.rhs)
		return primitive.logical(expr.op, a, b)

	def visit_Not(self, expr:syntax.Not):
		return primitive.negate(self.value_of(expr.arg))

	# Statements

	def visit_Declare(self, op:syntax.Declare):
		self._env.declare(op.name, self.value_of(op.value))

	def visit_Assign(self, op:syntax.Assign):
		if not self._env.holds(op.name):
			return self._report.undeclared_assignment(op)
		self._env.assign(op.name, self.value_of(op.value))

	def visit_Update(self, op:syntax.Update):
		if not self._env.holds(op.name):
			return self._report.undeclared_assignment(op)
		value = primitive.arithmetic(op.op, self._env.get(op.name), self.value_of(op.value))
		self._env.set(op.name, value)

	def visit_Print(self, op:syntax.Print):
		text = ' '.join(primitive.display(self.value_of(item)) for item in op.items)
		print(text, file=self._out or sys.stdout)

	def visit_If(self, op:syntax.If):
		if primitive.condition(self.value_of(op.condition)):
			self.tour(op.then_part)
		else:
			self.tour(op.else_part)

	def visit_Loop(self, op:syntax.Loop):
		for _ in range(primitive.repetitions(self.value_of(op.times))):
			self._tick()
			self.tour(op.body)

	def visit_While(self, op:syntax.While):
		while primitive.condition(self.value_of(op.condition)):
			self._tick()
			self.tour(op.body)

	def visit_Call(self, op:syntax.Call):
		fn = self._functions.lookup(op.function)
		if len(op.arguments) != len(fn.params):
			raise ArityMismatch(fn.name, len(fn.params), len(op.arguments))
		args = [self.value_of(a) for a in op.arguments]
		with self._env.scope(zip(fn.params, args)):
			self._calls.append(op)
			try: self.tour(fn.body)
			finally: self._calls.pop()

	def visit_Unknown(self, op:syntax.Unknown):
		self._report.unknown_operation(op)
