"""
Shared fixtures for neuroshell tests.
"""

import pytest

from neuroshell.cli.commands import command_registry, load_builtin_commands
from neuroshell.config import Config
from neuroshell.engine.shell import Shell


@pytest.fixture(scope="session")
def commands():
    """Global command registry with the package builtins loaded."""
    load_builtin_commands()
    return command_registry


@pytest.fixture
def shell(commands):
    """Fresh shell in test mode with default settings."""
    return Shell(commands, config=Config(), test_mode=True)


@pytest.fixture
def run(shell, capsys):
    """Run lines through the shell and return (result, stdout)."""
    def _run(*lines: str):
        capsys.readouterr()
        result = shell.execute("\n".join(lines))
        return result, capsys.readouterr().out
    return _run
