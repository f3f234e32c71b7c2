"""
Utility functions for Pulumi infrastructure.

Provides naming conventions, tag factories, and output utilities.
"""

from IAC.utils.naming import ResourceNamer
from IAC.utils.tags import create_tags, merge_tags
from IAC.utils.outputs import format_env_lines, write_outputs_to_env

__all__ = [
    "ResourceNamer",
    "create_tags",
    "merge_tags",
    "format_env_lines",
    "write_outputs_to_env",
]
