"""Setup script for Agenda Board.

This file is provided for backwards compatibility with older pip versions.
The main package configuration is in pyproject.toml.
"""

from setuptools import setup

# The actual configuration is in pyproject.toml
# This file is just a shim for compatibility
setup()
