"""slipstitch.core: foundation layer.

Contains the colour helpers, pattern types, colour resolver, PNG codec,
editor state, .slip file format and report builder.
This module has NO dependencies on slipstitch.commands or slipstitch.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
