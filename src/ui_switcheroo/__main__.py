"""
Entry point for module execution (``python -m ui_switcheroo``).

This module delegates execution to the CLI handler in ``ui_switcheroo.cli.__main__``.
"""

import sys
from ui_switcheroo.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
