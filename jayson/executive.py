"""
This is the overall control for one run of a program.
Every run gets its own environment and evaluator, so nothing leaks from one run to the next.
"""
from typing import Optional
from .syntax import Program
from .primitive import display
from .environment import Environment
from .evaluator import Evaluator
from .diagnostics import Report, JaysonRuntimeError

def run_program(program:Program, report:Report, *, out=None, max_steps:Optional[int]=None) -> Optional[Environment]:
	"""
	Returns the final global environment if the program runs to completion.
	Otherwise, the reason is on the report and the result is None.
	"""
	env = Environment(program.variables)
	evaluator = Evaluator(env, program.functions, report, out=out, max_steps=max_steps)
	report.info("Running", program.source_path or "<document>")
	try:
		evaluator.tour(program.main)
	except JaysonRuntimeError as ex:
		report.runtime_error(ex)
		return None
	except RecursionError:
		report.too_deep()
		return None
	for name, value in env.snapshot().items():
		report.info("  %s = %s"%(name, display(value)))
	return env
