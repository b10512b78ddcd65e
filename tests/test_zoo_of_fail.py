from pathlib import Path
import io
import unittest
from unittest import mock

from jayson.diagnostics import Report
from jayson.front_end import load_file
from jayson.executive import run_program

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False)
		self.complain_to_console = mock.Mock()
	pass

base_folder = Path(__file__).parent.parent
zoo_fail = base_folder/"zoo/fail"

def _identify_problem(folder:Path, filename:str, **kwargs):
	specimen_path = folder / filename
	assert specimen_path.exists(), specimen_path
	report = Silence()
	program = load_file(specimen_path, report)
	if program is None:
		assert report.sick()
		return report.issues[-1].kind
	report.assert_no_issues("Load reported errors but failed to fail.")
	if run_program(program, report, out=io.StringIO(), **kwargs) is None:
		assert 0 == report.complain_to_console.call_count
		return report.issues[-1].kind
	else: return "failed to fail"

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about failure modes. """

	def expect(self, kind, cases, **kwargs):
		for basename in cases:
			with self.subTest(basename):
				self.assertEqual(kind, _identify_problem(zoo_fail, basename + ".jayson", **kwargs))

	def test_00_load(self):
		self.expect("InvalidJSON", ["syntax_error"])
		self.expect("MalformedProgram", ["not_a_program", "statement_as_operand"])

	def test_01_missing_file(self):
		report = Silence()
		self.assertIsNone(load_file(zoo_fail/"no_such_file.jayson", report))
		self.assertEqual("FileNotFound", report.issues[0].kind)

	def test_02_runtime(self):
		self.expect("DivisionByZero", ["divide_by_zero"])
		self.expect("UndefinedFunction", ["undefined_function"])
		self.expect("ArityMismatch", ["wrong_arity"])
		self.expect("UndefinedVariable", ["undefined_variable"])
		self.expect("TypeMismatch", ["type_mismatch"])
		self.expect("NegativeCount", ["negative_count"])

	def test_03_runaway(self):
		self.expect("StepLimitExceeded", ["forever"], max_steps=1000)
		self.expect("TooDeep", ["bottomless"])
		self.expect("NestedTooDeep", ["nested_too_deep"])


if __name__ == '__main__':
	unittest.main()
