"""
CLI module for the neuroshell package.

Provides the `neuro` entry point, the interactive REPLs and the directive
command registry.
"""
