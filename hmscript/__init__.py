"""
hmscript: a small line-oriented scripting language, run by walking its text.

The interesting bits are in `evaluator` (expressions) and `executive` (statements and blocks).
"""
