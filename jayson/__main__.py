"""
Lets `python -m jayson program.jayson` do the same as the `jayson` command.
"""
import sys
from jayson.cmdline import main

sys.exit(main())
