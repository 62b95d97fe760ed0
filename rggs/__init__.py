"""
RGGS - Relational Growth Grammar System

A declarative graph-rewriting engine: rules pair a small node/edge pattern
with procedures (add, delete, replace, merge) that are applied to every
occurrence of the pattern in an attributed, undirected graph.
"""

__version__ = "0.1.0"

# Expose common submodules for convenience
from .config import PRESET_MINIMAL, PRESET_RESEARCH, PRESET_STANDARD  # noqa: F401
from .core import *  # noqa: F401,F403
from .generation import *  # noqa: F401,F403
from .rules import *  # noqa: F401,F403
from .utils import *  # noqa: F401,F403
