# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
manifestc: semantic validator for the manifest language.

Subpackages:
  core: diagnostics, issue catalogue, node descriptions
  parser: AST node family and the PN interchange reader
  validator: traversal, manifest rule set, workflow rule set

The CLI entrypoint is `manifestc.manifestc:main`.
"""

__version__ = "0.1.0"

__all__ = ["core", "parser", "validator"]
