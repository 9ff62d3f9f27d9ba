"""
Run the distinguisher from the command line::

    python -m qdistinguish --help
"""

import sys

from .cli import main

sys.exit(main())
