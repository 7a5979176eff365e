"""
Everything that reaches the console on standard error comes through here.

The evaluator itself never complains: language-level mistakes quietly
evaluate to `none`. What's left is the short list of ways a run can
actually fail, plus some optional chatter for the curious.
"""
import sys, random
from pathlib import Path
from typing import Optional
from boozetools.support.failureprone import illustration

from .location import Line

class Trap(Exception):
	""" The host refused to go on (e.g. integer division by zero) somewhere in a program's run. """
	def __init__(self, line:Line, message:str):
		super().__init__(message)
		self.line = line
		self.message = message

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]
	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott", 'Heavens',
		'Jeepers', 'Nuts', 'Rats',
	]
	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
	]
	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects the issues found along the way, and says something about them at the end. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:Optional[int]=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []

	@property
	def issues(self): return tuple(self._issues)

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the loader calls:

	def no_such_file(self, path:Path):
		self.issue(Pic("Could not open file "+str(path), []))

	def broken_file(self, path:Path):
		self.issue(Pic("Something went pear-shaped while trying to read "+str(path), []))

	# Methods the entry dispatcher calls:

	def no_entry_directive(self, path:Optional[Path]):
		intro = "Main class not found: nothing names one."
		footer = ["Put a line like `$Main` in %s to say which class runs." % (path or "the program")]
		self.issue(Pic(intro, [], footer))

	def no_such_entry_class(self, name:str, site:Optional[Line]):
		intro = "Main class not found: there is no class called '%s'." % name
		problem = [Annotation(site, "named here")] if site is not None else []
		self.issue(Pic(intro, problem))

	# Methods for trouble at run-time:

	def trap(self, trap:Trap):
		intro = "The program stopped: "+trap.message
		self.issue(Pic(intro, [Annotation(trap.line, "while running this line")]))

	def ignored(self, line:str):
		self.info("Ignored (no statement looks like this):", line)

class Annotation:
	def __init__(self, line:Line, caption:str=""):
		self.line = line
		self.caption = caption
	def illustrate(self):
		text = self.line.text.strip()
		width = max(len(text), 1)
		source = self.line.source
		if source is None:
			return illustration(text, 0, width, prefix='     ? |', caption=self.caption)
		row, col = source.find_row_col(self.line.start)
		single_line = source.line_of_text(row)
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def description(self): return self._intro
	def as_text(self):
		lines = [self._intro, ""]
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
