"""CLI package bootstrap.

Defines root group (`cli`) in helpers and imports submodules so their
decorators register commands.
"""
from rbq.cli.helpers import cli  # root group
from rbq.cli import config_cmds  # noqa: F401
from rbq.cli import session_cmds  # noqa: F401

__all__ = ["cli"]
