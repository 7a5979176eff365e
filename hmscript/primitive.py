"""
Built-in functions, and the arithmetic behind a few built-in members.
Everything here takes arguments that have already been evaluated.
"""
import sys, math, random
from .values import VALUE, render, to_int, to_float, to_bool, is_int, is_number, ieee_division

def _print(args, env):
	for arg in args:
		sys.stdout.write(render(arg))
	sys.stdout.flush()

def _input(args, env):
	line = sys.stdin.readline()
	return line[:-1] if line.endswith("\n") else line

def _int(args, env): return to_int(args[0]) if args else 0
def _float(args, env): return to_float(args[0]) if args else 0.0
def _bool(args, env): return to_bool(args[0]) if args else False

def _round(args, env):
	value, places = args[0], args[1]
	if not is_number(value): return None
	try: scale = 10.0 ** (places if is_int(places) else 0)
	except OverflowError: scale = math.inf
	return ieee_division(round_half_away(value * scale), scale)

def _ceil(args, env):
	value = args[0]
	if not is_number(value): return None
	if not math.isfinite(value): return float(value)
	return float(math.ceil(value))

# name : (fewest arguments, implementation)
# With too few arguments, a name is not taken for a built-in at all.
BUILTINS = {
	"print" : (0, _print),
	"input" : (0, _input),
	"int"   : (0, _int),
	"float" : (0, _float),
	"bool"  : (0, _bool),
	"round" : (2, _round),
	"ceil"  : (1, _ceil),
}

def round_half_away(x:float) -> float:
	if not math.isfinite(x): return x
	whole = math.trunc(x)
	fraction = x - whole
	if fraction >= 0.5: whole += 1
	elif fraction <= -0.5: whole -= 1
	return math.copysign(float(whole), x)

###############################################################################

def list_sum(items:list) -> int:
	""" Integers and flags count; everything else counts as zero. """
	return sum(int(v) for v in items if type(v) in (int, bool))

def square_root(value:VALUE) -> VALUE:
	if not is_number(value): return None
	return math.sqrt(value) if value >= 0 else math.nan

def coin_flip(rng:random.Random) -> int:
	return rng.randint(0, 1)
