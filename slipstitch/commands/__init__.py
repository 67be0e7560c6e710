"""CLI subcommands.

Every module here that defines a `command` object is registered by
slipstitch.registry.discover(); its docstring is what `slipstitch help`
prints.
"""
