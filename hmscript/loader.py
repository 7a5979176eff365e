"""
Reading a program, and finding its classes and its entry point.

A program is one file. A line beginning with `$` names the entry class.
Lines beginning with `#` or `@` are import directives: noted, then ignored.
Each `class Name {` runs until its braces balance, and within it each
`fn name(params) {` is set aside as a method, which leaves the rest of the
class body as the statements that run if this turns out to be the entry class.
"""
import re
from pathlib import Path
from typing import Optional
from boozetools.support.failureprone import SourceText

from . import lexical
from .diagnostics import Report
from .executive import DECLARE_AND_INIT, DECLARE
from .location import Line, split_lines
from .values import ClassDescriptor, zero_value

METHOD_HEAD = re.compile(r"fn\s+(\w+)\s*\(([^)]*)\)?", re.ASCII)

class Program:
	entry: Optional[str]
	entry_site: Optional[Line]
	classes: dict[str, ClassDescriptor]
	imports: list[Line]

	def __init__(self, source:SourceText, path:Optional[Path]=None):
		self.source = source
		self.path = path
		self.entry = None
		self.entry_site = None
		self.classes = {}
		self.imports = []

def load_program(path:Path, report:Report) -> Optional[Program]:
	""" Reads the file exactly once. On failure, makes a note in the report and returns None. """
	report.info("Loading", path)
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
		return None
	except (OSError, UnicodeDecodeError):
		report.broken_file(path)
		return None
	program = parse_program(text, path)
	report.info("Classes:", ", ".join(program.classes) or "(none)", "; entry:", program.entry)
	return program

def parse_program(text:str, path:Optional[Path]=None) -> Program:
	source = SourceText(text, filename=str(path)) if path is not None else SourceText(text)
	program = Program(source, path)
	lines = split_lines(text, source)
	i = 0
	while i < len(lines):
		line = lines[i]
		text = lexical.clean(line.text)
		i += 1
		if text.startswith("$"):
			program.entry = lexical.trim(text[1:])
			program.entry_site = line
		elif text.startswith("#") or text.startswith("@"):
			program.imports.append(line)
		elif text.startswith("class "):
			descriptor, i = _read_class(text, lines, i)
			program.classes[descriptor.name] = descriptor
	return program

def _read_class(head:str, lines:list[Line], i:int) -> tuple[ClassDescriptor, int]:
	brace = head.find("{")
	descriptor = ClassDescriptor(lexical.trim(head[6:] if brace < 0 else head[6:brace]))
	depth = 1
	while i < len(lines):
		line = lines[i]
		text = lexical.clean(line.text)
		if depth == 1:
			method = METHOD_HEAD.match(text)
			if method:
				i = _read_method(descriptor, method, lines, i)
				continue
			_note_declaration(descriptor, text)
		if "{" in text: depth += 1
		if "}" in text:
			depth -= 1
			if depth == 0: return descriptor, i + 1
		descriptor.body.append(line)
		i += 1
	return descriptor, i

def _note_declaration(descriptor:ClassDescriptor, text:str):
	match = DECLARE_AND_INIT.fullmatch(text) or DECLARE.fullmatch(text)
	if match:
		descriptor.variables[match[2]] = zero_value(match[1])

def _read_method(descriptor:ClassDescriptor, head:re.Match, lines:list[Line], i:int) -> int:
	""" Sets the method aside and returns the index just past its closing brace. """
	name = head[1]
	descriptor.parameters[name] = [
		lexical.last_word(p) for p in lexical.split_arguments(head[2] or "") if p
	]
	start = i
	depth = 0
	opened = False
	while i < len(lines):
		text = lexical.clean(lines[i].text)
		i += 1
		if "{" in text:
			depth += 1
			opened = True
		if "}" in text: depth -= 1
		if opened and depth <= 0: break
	if i - start == 1:
		# The whole method sits on its head line.
		text = lexical.clean(lines[start].text)
		inline = lexical.trim(text[text.find("{")+1:text.rfind("}")])
		descriptor.functions[name] = [inline] if inline else []
	else:
		descriptor.functions[name] = [line.text for line in lines[start+1:i-1]]
	return i
