"""Secern: single-pass, priority-ordered regex sifting of line streams.

Each line read from STDIN is routed to at most one named sink:
  - Sinks are evaluated in declared order; the first match wins
  - A sink matches if any of its patterns match, or none with ``invert``
  - Sinks write to a file, or discard with ``file_name: null``
  - Unclaimed lines pass through to STDOUT unless disabled
  - Any output failure aborts the whole run with a non-zero status
"""

__version__ = "0.9.1"
__description__ = (
    "Command line string sifting: route lines into output files using "
    "regex patterns defined in a YAML configuration"
)

from secern.core.driver import StreamDriver
from secern.loader import load_config, parse_config
from secern.routing.router import Router, build_router

__all__ = [
    "Router",
    "StreamDriver",
    "build_router",
    "load_config",
    "parse_config",
    "__version__",
]
