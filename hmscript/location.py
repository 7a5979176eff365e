"""
Programs are handled one line at a time, from loading right through execution.
Each line remembers where it came from, so that a complaint can point at it.
"""
from typing import NamedTuple, Optional, Iterable
from boozetools.support.failureprone import SourceText

class Line(NamedTuple):
	""" One physical line; `start` is the offset of its first visible character within `source`. """
	text: str
	source: Optional[SourceText]
	start: int

def split_lines(text:str, source:Optional[SourceText]=None) -> list[Line]:
	lines = []
	offset = 0
	pieces = text.split("\n")
	if pieces and pieces[-1] == "":
		pieces.pop()
	for piece in pieces:
		indent = len(piece) - len(piece.lstrip(" \t"))
		lines.append(Line(piece, source, offset + indent))
		offset += len(piece) + 1
	return lines

def bare_lines(texts:Iterable[str]) -> list[Line]:
	""" For lines that never lived in a file. """
	return [Line(text, None, 0) for text in texts]
