"""
Same as the `mython` command:

    py -m mython program.my
"""
from .cmdline import main

main()
