"""
manifestc.parser: the manifest AST node family and the PN reader that builds
it from the front-end's interchange output.
"""

from __future__ import annotations

from . import ast
from .pn import PNError, read_pn, read_pn_file

__all__ = ["ast", "PNError", "read_pn", "read_pn_file"]
