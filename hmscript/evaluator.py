"""
The expression evaluator.

There is no tokenizer and no grammar. An expression is a string, and the
evaluator decides what sort of thing it is by looking for tell-tale
substrings in a fixed order, splitting the text and recursing on the pieces.

The order is the contract. It is *not* precedence-correct, and programs
depend on exactly how it isn't:

	* Logic and comparison split at the first occurrence of the operator.
	* Arithmetic splits at the *last* occurrence, trying - then + then * then /.
	  So `a-b+c` means `a-(b+c)`, and `2*3/4` means `2*(3/4)`.
	  A minus sign with no operand on its left is part of a number, not a split point.
	* Anything with a dot in it is a member access, so `x + 1.5` is absent.

When no rule applies, or a rule meets the wrong kinds of values,
the answer is absent (None) rather than an error.
"""
import re
from . import lexical, primitive
from .environment import Environment
from .values import VALUE, Instance, truth, render, compare, arithmetic, duplicate, iterate, is_int

_INTEGER = re.compile(r"-?[0-9]+")
_FLOAT = re.compile(r"-?[0-9]+\.[0-9]+")

RESERVED = {"true": True, "false": False}
EQUALITY_OPS = ("==", "!=", "<=", ">=")
ORDERING_OPS = ("<", ">")
ARITHMETIC_OPS = ("-", "+", "*", "/")

def evaluate(expr:str, env:Environment) -> VALUE:
	expr = lexical.trim(expr)

	if len(expr) >= 2 and expr[0] == '"' and expr[-1] == '"':
		return _eval_string(expr, env)
	if expr in RESERVED:
		return RESERVED[expr]
	if _INTEGER.fullmatch(expr):
		return int(expr)
	if _FLOAT.fullmatch(expr):
		return float(expr)
	if "[" in expr and " for " in expr:
		return evaluate_comprehension(expr, env)
	if "(" in expr and "[" not in expr:
		return evaluate_call(expr, env)
	if "[" in expr and "]" in expr:
		return evaluate_subscript(expr, env)
	if "." in expr:
		return evaluate_member(expr, env)
	if "?" in expr and ":" in expr[expr.find("?"):]:
		return _eval_ternary(expr, env)

	pos = expr.find(" or ")
	if pos >= 0:
		return truth(evaluate(expr[:pos], env)) or truth(evaluate(expr[pos+4:], env))
	pos = expr.find(" and ")
	if pos >= 0:
		return truth(evaluate(expr[:pos], env)) and truth(evaluate(expr[pos+5:], env))

	for op in EQUALITY_OPS:
		pos = expr.find(op)
		if pos > 0:
			return compare(evaluate(expr[:pos], env), op, evaluate(expr[pos+len(op):], env))
	for op in ORDERING_OPS:
		pos = expr.find(op)
		if pos > 0 and expr[pos+1:pos+2] != "=":
			return compare(evaluate(expr[:pos], env), op, evaluate(expr[pos+1:], env))
	for op in ARITHMETIC_OPS:
		pos = _split_point(expr, op)
		if 0 < pos < len(expr) - 1:
			return arithmetic(evaluate(expr[:pos], env), op, evaluate(expr[pos+1:], env))

	return env.lookup(expr)

def _split_point(expr:str, op:str) -> int:
	pos = expr.rfind(op)
	if op == "-":
		while pos > 0 and lexical.trim(expr[:pos])[-1:] in ("", "+", "-", "*", "/"):
			pos = expr.rfind(op, 0, pos)
	return pos

def _eval_string(expr:str, env:Environment) -> str:
	text = lexical.unescape(expr[1:-1])
	return lexical.interpolate(text, lambda inner: render(evaluate(inner, env)))

def _eval_ternary(expr:str, env:Environment) -> VALUE:
	q = expr.find("?")
	c = expr.find(":", q)
	branch = expr[q+1:c] if truth(evaluate(expr[:q], env)) else expr[c+1:]
	return evaluate(branch, env)

###############################################################################

def evaluate_comprehension(expr:str, env:Environment) -> VALUE:
	""" [ output for <type?> name in iterable ], with the loop variable put back afterward. """
	opening, closing = expr.find("["), expr.rfind("]")
	if closing < opening: return None
	inside = expr[opening+1:closing]
	for_pos = inside.find(" for ")
	in_pos = inside.find(" in ", for_pos)
	if for_pos < 0 or in_pos < 0: return None

	output = inside[:for_pos]
	name = lexical.last_word(inside[for_pos+5:in_pos])
	items = iterate(evaluate(inside[in_pos+4:], env))

	saved = env.snapshot(name)
	result = []
	try:
		for item in items:
			env.bind(name, item)
			result.append(evaluate(output, env))
	finally:
		env.restore(name, saved)
	return result

def evaluate_call(expr:str, env:Environment) -> VALUE:
	"""
	name(arg, ...) for built-ins and class construction.
	Bare call statements come straight here, too, whatever else they contain.
	"""
	paren = expr.find("(")
	if paren < 0: return None
	name = lexical.trim(expr[:paren])
	if "." in name:
		return evaluate_member(expr, env)

	args = [evaluate(a, env) for a in lexical.split_arguments(lexical.parenthesized(expr))]

	if name in primitive.BUILTINS:
		fewest, fn = primitive.BUILTINS[name]
		if len(args) >= fewest:
			return fn(args, env)
	if name in env.classes:
		return Instance(env.classes[name].copy())
	return None

###############################################################################

def evaluate_subscript(expr:str, env:Environment) -> VALUE:
	""" name[i], name[a:b], name[::-1]. Only a plain variable can be subscripted. """
	opening, closing = expr.find("["), expr.rfind("]")
	if closing < opening: return None
	name = lexical.trim(expr[:opening])
	index_text = expr[opening+1:closing]
	if not env.is_bound(name): return None
	target = env.peek(name)

	if ":" in index_text:
		return _slice(target, index_text.split(":"), env)

	index = evaluate(index_text, env)
	if type(target) in (list, str) and is_int(index):
		if index < 0: index += len(target)
		if 0 <= index < len(target):
			return duplicate(target[index])
	return None

def _slice(target:VALUE, parts:list[str], env:Environment) -> VALUE:
	if type(target) not in (list, str): return None
	bounds = [lexical.trim(p) for p in parts]
	if bounds == ["", "", "-1"]:
		return duplicate(target[::-1])
	size = len(target)
	start = _slice_bound(bounds[0], 0, size, env)
	stop = _slice_bound(bounds[1], size, size, env)
	if start is None or stop is None: return None
	return duplicate(target[start:stop])

def _slice_bound(text:str, default:int, size:int, env:Environment):
	if not text: return default
	bound = evaluate(text, env)
	if not is_int(bound): return None
	if bound < 0: bound += size
	return min(max(bound, 0), size)

###############################################################################

def evaluate_member(expr:str, env:Environment) -> VALUE:
	dot = expr.find(".")
	owner = lexical.trim(expr[:dot])
	member = lexical.trim(expr[dot+1:])

	if env.is_bound(owner):
		target = env.peek(owner)
		if type(target) is str and "lower" in member:
			return target.lower()
		if type(target) is list:
			if member in ("len", "len()"):
				return len(target)
			if member in ("sum", "sum()"):
				return primitive.list_sum(target)
			if "append(" in member:
				target.append(evaluate(lexical.parenthesized(member), env))
				return None
		if isinstance(target, Instance) and member in target.fields:
			return duplicate(target.fields[member])

	if owner == "math" and "sqrt(" in member:
		return primitive.square_root(evaluate(lexical.parenthesized(member), env))
	if owner == "random" and "rng(" in member:
		return primitive.coin_flip(env.rng)
	return None
