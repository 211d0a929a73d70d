"""
manifestc.core: shared diagnostics and issue machinery used by the validator.

Modules:
  - span: source span attached to diagnostics
  - diagnostics: Diagnostic record and the per-pass IssueSink
  - issues: issue codes, message templates, severities, strictness
  - describe: article + label rendering of nodes for messages
"""

__all__ = [
	"span",
	"diagnostics",
	"issues",
	"describe",
]
