"""Pytest configuration to make the project root importable.

The game modules live at the repository root (``components``, ``puzzles``,
``session``); this puts that directory on ``sys.path`` when tests are run
from elsewhere.
"""

import os
import sys

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
