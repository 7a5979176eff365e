""" So that `python -m hmscript` does the same as the `hmscript` command. """
from .cmdline import main

main()
