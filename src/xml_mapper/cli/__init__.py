"""Command-line interface module for xml-mapper.

This module provides the xml-mapper tool for comparing XML files
structurally and normalizing them through the object model.
"""

from .main import main

__all__ = ["main"]
