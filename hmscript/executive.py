"""
The statement executor and the block driver.

A statement occupies one line, and its shape decides what it does.
The shapes are tried in a fixed order; the first to fit wins:

	int x = expr        declaration with initializer (the type is not checked)
	int x               declaration: binds the type's zero
	x = expr            assignment
	obj.field = expr    member assignment, for class-instances only
	x++                 integers only
	x *= expr           integers only
	anything with (     evaluated as a call, for its side-effects

`for (...) {` and `while (...) {` heads gather the lines up to their
matching brace, counting braces per line rather than per token,
and run them as a block.
"""
import re
from typing import Optional, Sequence

from . import lexical
from .diagnostics import Report, Trap
from .environment import Environment
from .evaluator import evaluate, evaluate_call
from .location import Line
from .values import Instance, truth, is_int, iterate, zero_value

TYPE_NAMES = ("int", "float", "str", "bool", "map", "list")
_BUILT_IN_TYPE = r"(?:%s)(?:\[\])?" % "|".join(TYPE_NAMES)

DECLARE_AND_INIT = re.compile(r"(\w+(?:\[\])?)\s+(\w+)\s*=\s*(.+)", re.ASCII)
DECLARE = re.compile(r"(%s)\s+(\w+)" % _BUILT_IN_TYPE, re.ASCII)
ASSIGN = re.compile(r"(\w+)\s*=\s*(.+)", re.ASCII)
ASSIGN_MEMBER = re.compile(r"(\w+)\.(\w+)\s*=\s*(.+)", re.ASCII)
INCREMENT = re.compile(r"(\w+)\s*\+\+", re.ASCII)
MULTIPLY_ASSIGN = re.compile(r"(\w+)\s*\*=\s*(.+)", re.ASCII)
BLOCK_HEAD = re.compile(r"(for|while)\s*\(")
RETURN = re.compile(r"return\b")

def execute_statement(text:str, env:Environment) -> bool:
	""" Returns whether the line looked like any statement at all. """
	stmt = lexical.clean(text)
	if not stmt: return True

	match = DECLARE_AND_INIT.fullmatch(stmt)
	if match:
		env.bind(match[2], evaluate(match[3], env))
		return True
	match = DECLARE.fullmatch(stmt)
	if match:
		env.bind(match[2], zero_value(match[1]))
		return True
	match = ASSIGN.fullmatch(stmt)
	if match:
		env.bind(match[1], evaluate(match[2], env))
		return True
	match = ASSIGN_MEMBER.fullmatch(stmt)
	if match:
		target = env.peek(match[1])
		if isinstance(target, Instance):
			target.fields[match[2]] = evaluate(match[3], env)
		return True

	match = INCREMENT.fullmatch(stmt)
	if match:
		name = match[1]
		if is_int(env.peek(name)):
			env.bind(name, env.peek(name) + 1)
		return True
	match = MULTIPLY_ASSIGN.fullmatch(stmt)
	if match:
		name = match[1]
		factor = evaluate(match[2], env)
		if is_int(env.peek(name)) and is_int(factor):
			env.bind(name, env.peek(name) * factor)
		return True

	if "(" in stmt:
		evaluate_call(stmt, env)
		return True
	return False

def execute_block(lines:Sequence[Line], env:Environment, report:Optional[Report]=None):
	i = 0
	while i < len(lines):
		line = lines[i]
		text = lexical.clean(line.text)
		i += 1
		if not text or RETURN.match(text):
			continue
		try:
			head = BLOCK_HEAD.match(text)
			if head:
				body, i = collect_block(lines, i)
				if head[1] == "while": _run_while(text, body, env, report)
				else: _run_for(text, body, env, report)
			elif not execute_statement(text, env) and report is not None:
				report.ignored(text)
		except ZeroDivisionError:
			raise Trap(line, "Integer division by zero.")

def collect_block(lines:Sequence[Line], i:int) -> tuple[list[Line], int]:
	"""
	Starting just after a block head, gather lines until the braces balance.
	Returns the body and the index just past the closing line.
	"""
	depth = 1
	body = []
	while i < len(lines):
		text = lexical.strip_comment(lines[i].text)
		if "{" in text: depth += 1
		if "}" in text:
			depth -= 1
			if depth == 0: return body, i + 1
		body.append(lines[i])
		i += 1
	return body, i

def _run_while(head:str, body:list[Line], env:Environment, report:Optional[Report]):
	condition = lexical.parenthesized(head)
	while truth(evaluate(condition, env)):
		execute_block(body, env, report)

def _run_for(head:str, body:list[Line], env:Environment, report:Optional[Report]):
	# The loop variable is left bound afterward, unlike in a list-comprehension.
	header = lexical.parenthesized(head)
	pos = header.find(" in ")
	if pos < 0: return
	name = lexical.last_word(header[:pos])
	for item in iterate(evaluate(header[pos+4:], env)):
		env.bind(name, item)
		execute_block(body, env, report)

###############################################################################

def run_program(program, report:Report, env:Optional[Environment]=None) -> Optional[Environment]:
	"""
	Run the entry class's body against a fresh environment (unless given one).
	Returns the environment afterward, or None if there was no entry class to run.
	May raise Trap.
	"""
	if program.entry is None:
		report.no_entry_directive(program.path)
		return None
	descriptor = program.classes.get(program.entry)
	if descriptor is None:
		report.no_such_entry_class(program.entry, program.entry_site)
		return None
	if env is None:
		env = Environment(program.classes, entry=program.entry)
	report.info("Running class", program.entry)
	execute_block(descriptor.body, env, report)
	return env
