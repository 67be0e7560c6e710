"""Command auto-discovery and registration.

Scans slipstitch/commands/ for modules that define a `command` object
of type Command and collects them into a dict keyed by command name.
The defining module's docstring becomes the command's full docs.
"""

import importlib
import pkgutil

import slipstitch.commands
from slipstitch.core.types import Command

_registry: dict[str, Command] = {}


def discover() -> dict[str, Command]:
    """Import all command modules and return the registry."""
    if _registry:
        return _registry

    for info in pkgutil.iter_modules(slipstitch.commands.__path__, prefix='slipstitch.commands.'):
        if info.name.rsplit('.', 1)[-1].startswith('_'):
            continue
        module = importlib.import_module(info.name)
        cmd = getattr(module, 'command', None)
        if isinstance(cmd, Command):
            cmd.doc = module.__doc__ or ''
            _registry[cmd.name] = cmd

    return _registry


def get(name: str) -> Command:
    """Get a command by name."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown command: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_commands() -> dict[str, Command]:
    return discover()
