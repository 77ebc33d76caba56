"""
neuroshell - a shell for backslash-directive scripts.

Lines such as `\\set[name=World]` and `\\echo Hello ${name}` are run by a
dispatch loop over an execution queue (script body) and an execution stack
(expanded blocks), with `\\try` and `\\silent` blocks tracked as nested
boundaries.

Example usage:
    from neuroshell.cli.commands import command_registry, load_builtin_commands
    from neuroshell.engine.shell import Shell

    load_builtin_commands()
    shell = Shell(command_registry, test_mode=True)
    shell.execute(r"\\set[name=World]")
    shell.execute(r"\\echo Hello ${name}")
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
