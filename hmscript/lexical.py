"""
The few bits of text-shuffling that everything else leans on.
None of it knows what an expression means.
"""
import re
from typing import Callable

WHITESPACE = " \t\r\n"

def trim(text:str) -> str:
	return text.strip(WHITESPACE)

def strip_comment(text:str) -> str:
	pos = text.find("//")
	return text if pos < 0 else text[:pos]

def clean(text:str) -> str:
	return trim(strip_comment(text))

def last_word(text:str) -> str:
	""" `int i` declares `i`; so does a bare `i`. """
	words = text.split()
	return words[-1] if words else ""

def parenthesized(text:str) -> str:
	""" From just after the first "(" to just before the last ")", or to the end if none closes. """
	opening = text.find("(")
	closing = text.rfind(")")
	if closing <= opening: return text[opening+1:]
	return text[opening+1:closing]

_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"'}

def unescape(text:str) -> str:
	""" Unknown escapes stay as written, backslash and all. """
	out = []
	i = 0
	while i < len(text):
		if text[i] == "\\" and i + 1 < len(text):
			pair = text[i:i+2]
			out.append(_ESCAPES.get(text[i+1], pair))
			i += 2
		else:
			out.append(text[i])
			i += 1
	return "".join(out)

_PLACEHOLDER = re.compile(r"\{([^}]+)\}")

def interpolate(text:str, substitute:Callable[[str], str]) -> str:
	""" One pass, left to right: what gets substituted in is not searched again. """
	return _PLACEHOLDER.sub(lambda match: substitute(match.group(1)), text)

def split_arguments(text:str) -> list[str]:
	"""
	Plain comma-splitting: no regard for nesting or quotes, so `f(g(a, b))` comes apart.
	A trailing comma leaves no empty argument behind it.
	"""
	if not text: return []
	pieces = text.split(",")
	if pieces[-1] == "": pieces.pop()
	return [trim(p) for p in pieces]
