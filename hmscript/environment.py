"""
The one flat namespace a program runs in, and the classes it may construct.

There is no block scope and no call stack. Whatever a loop binds stays bound
afterward; only list-comprehensions put things back the way they found them.
"""
import random
from typing import Optional
from .values import VALUE, ClassDescriptor, duplicate

_UNBOUND = object()

class Environment:
	variables: dict[str, VALUE]
	classes: dict[str, ClassDescriptor]

	def __init__(self, classes:Optional[dict[str, ClassDescriptor]]=None, *, entry:Optional[str]=None, rng:Optional[random.Random]=None):
		self.variables = {}
		self.classes = dict(classes or {})
		self.entry = entry
		# Seeded once, from the operating system's entropy, unless a test supplies its own.
		self.rng = random.Random() if rng is None else rng

	def is_bound(self, name:str) -> bool:
		return name in self.variables

	def lookup(self, name:str) -> VALUE:
		""" What an expression sees: a copy, so that nothing done to it shows through the variable. """
		return duplicate(self.variables.get(name))

	def peek(self, name:str) -> VALUE:
		""" The stored value itself, for the few operations which mutate in place. """
		return self.variables.get(name)

	def bind(self, name:str, value:VALUE):
		self.variables[name] = value

	def unbind(self, name:str):
		self.variables.pop(name, None)

	def snapshot(self, name:str):
		return self.variables.get(name, _UNBOUND)

	def restore(self, name:str, saved):
		if saved is _UNBOUND: self.unbind(name)
		else: self.bind(name, saved)
