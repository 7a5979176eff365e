"""
The run-time value model.

Basic values play themselves: int, float, str, bool, list, and dict (for
mappings) are just the corresponding Python objects, and None stands for
the absent value. Only class-instances need a representation of their own.

Take care that bool is a subclass of int in Python but not in the language:
a flag never takes part in arithmetic or ordering. Hence all the `type(x) is`.
"""
import math, operator, re
from typing import Union, Optional, Iterable
from boozetools.support.foundation import Visitor

class ClassDescriptor:
	""" What the loader learns about a class. Methods get recorded, but nothing ever calls them. """
	def __init__(self, name:str):
		self.name = name
		self.variables = {}
		self.functions: dict[str, list[str]] = {}
		self.parameters: dict[str, list[str]] = {}
		self.body = []

	def copy(self) -> "ClassDescriptor":
		twin = ClassDescriptor(self.name)
		twin.variables = dict(self.variables)
		twin.functions = {k: list(v) for k, v in self.functions.items()}
		twin.parameters = {k: list(v) for k, v in self.parameters.items()}
		twin.body = list(self.body)
		return twin

	def __repr__(self): return "<class %s>" % self.name

class Instance:
	def __init__(self, descriptor:ClassDescriptor, fields:Optional[dict]=None):
		self.descriptor = descriptor
		self.fields = {} if fields is None else fields
	def __repr__(self): return "<%s %r>" % (self.descriptor.name, self.fields)

VALUE = Union[None, bool, int, float, str, list, dict, Instance]

def is_int(value) -> bool: return type(value) is int
def is_number(value) -> bool: return type(value) in (int, float)

###############################################################################

class _Render(Visitor):
	def visit_NoneType(self, value): return "none"
	def visit_bool(self, value): return "true" if value else "false"
	def visit_int(self, value): return str(value)
	def visit_float(self, value): return repr(value)
	def visit_str(self, value): return value
	def visit_list(self, value): return "[%s]" % ", ".join(map(self.visit, value))
	def visit_dict(self, value):
		return "{%s}" % ", ".join("%s: %s" % (k, self.visit(v)) for k, v in value.items())
	def visit_Instance(self, value): return "<%s>" % value.descriptor.name

class _Duplicate(Visitor):
	"""
	Variables hold values, not references: reading a list out of one variable and
	into another must not let a later `append` show through both.
	The class descriptor itself is shared, though; it never changes after loading.
	"""
	def _self(self, value): return value
	visit_NoneType = visit_bool = visit_int = visit_float = visit_str = _self
	def visit_list(self, value): return [self.visit(v) for v in value]
	def visit_dict(self, value): return {k: self.visit(v) for k, v in value.items()}
	def visit_Instance(self, value):
		return Instance(value.descriptor, self.visit_dict(value.fields))

_render = _Render()
_duplicate = _Duplicate()

def render(value:VALUE) -> str: return _render.visit(value)
def duplicate(value:VALUE) -> VALUE: return _duplicate.visit(value)

def truth(value:VALUE) -> bool:
	if type(value) in (bool, int, float, str): return bool(value)
	return False

def iterate(value:VALUE) -> Iterable[VALUE]:
	""" What `for` and list-comprehensions walk over. Anything else walks over nothing. """
	if type(value) is list: return list(value)
	if type(value) is str: return list(value)
	if is_int(value): return range(value)
	return ()

def zero_value(type_name:str) -> VALUE:
	""" The value a declaration without an initializer binds. """
	if type_name == "list" or type_name.endswith("[]"): return []
	if type_name == "int": return 0
	if type_name == "map": return {}
	return None

###############################################################################

def _truncating_division(a:int, b:int) -> int:
	quotient = abs(a) // abs(b)
	return quotient if (a < 0) == (b < 0) else -quotient

def ieee_division(a:float, b:float) -> float:
	try: return a / b
	except ZeroDivisionError:
		if a == 0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)

INTEGER_ARITHMETIC = {
	"+" : operator.add,
	"-" : operator.sub,
	"*" : operator.mul,
	"/" : _truncating_division,
}
FLOAT_ARITHMETIC = {
	"+" : operator.add,
	"-" : operator.sub,
	"*" : operator.mul,
	"/" : ieee_division,
}
RELATIONS = {
	"==" : operator.eq,
	"!=" : operator.ne,
	"<=" : operator.le,
	">=" : operator.ge,
	"<"  : operator.lt,
	">"  : operator.gt,
}

def arithmetic(a:VALUE, op:str, b:VALUE) -> VALUE:
	"""
	Two integers make an integer; an integer divided by zero raises ZeroDivisionError.
	Otherwise any float widens both sides to float. Anything else is absent.
	"""
	if is_int(a) and is_int(b):
		return INTEGER_ARITHMETIC[op](a, b)
	if is_number(a) and is_number(b):
		return FLOAT_ARITHMETIC[op](float(a), float(b))
	return None

def compare(a:VALUE, op:str, b:VALUE) -> bool:
	if is_int(a) and is_int(b):
		return RELATIONS[op](a, b)
	if type(a) is str and type(b) is str and op == "==":
		return a == b
	return False

###############################################################################

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")

def to_int(value:VALUE) -> VALUE:
	if type(value) is str:
		match = _LEADING_INT.match(value)
		return int(match.group(1)) if match else None
	if type(value) is float:
		return int(value) if math.isfinite(value) else None
	if type(value) in (bool, int):
		return int(value)
	return 0

def to_float(value:VALUE) -> VALUE:
	if type(value) is str:
		match = _LEADING_FLOAT.match(value)
		return float(match.group(1)) if match else None
	if type(value) in (bool, int, float):
		return float(value)
	return 0.0

def to_bool(value:VALUE) -> bool:
	return truth(value)
