"""
Built-in directives package.

Directives are loaded from individual subdirectories, each containing an
__init__.py that registers the directive using @command_registry.register().

A directory copied to ~/.neuro/commands/ and edited there replaces the
package version.
"""
