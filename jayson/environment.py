"""
Simplest possible environment concept: one dictionary at a time.

Function calls do not chain to the caller's variables. A call installs a
fresh dictionary holding only the parameters, and puts the old one back
when the call is over, however it ends.
"""
from contextlib import contextmanager
from typing import Any, Iterable, Mapping, Union
from .diagnostics import UndefinedVariable

class Environment:
	_bindings: dict[str, Any]

	def __init__(self, bindings:Union[Mapping[str, Any], Iterable, None]=None):
		self._bindings = dict(bindings or ())

	def holds(self, name:str) -> bool: return name in self._bindings

	def get(self, name:str) -> Any:
		try: return self._bindings[name]
		except KeyError: raise UndefinedVariable(name) from None

	def set(self, name:str, value:Any): self._bindings[name] = value

	def resolve(self, node:Any) -> Any:
		""" A string names a variable. Any other scalar stands for itself. """
		return self.get(node) if isinstance(node, str) else node

	def declare(self, name:str, value:Any):
		self._bindings[name] = value

	def assign(self, name:str, value:Any) -> bool:
		""" Only rebinds what already exists. Tells whether it did. """
		if name in self._bindings:
			self._bindings[name] = value
			return True
		return False

	@contextmanager
	def scope(self, bindings):
		saved = self._bindings
		self._bindings = dict(bindings)
		try: yield self
		finally: self._bindings = saved

	def snapshot(self) -> dict[str, Any]:
		return dict(self._bindings)
