"""
Command handlers for the gitlab-link preprocessor.

This module provides command handlers for the gitlab-link CLI.
"""

from gitlab_link.commands.preprocess import preprocess_command
from gitlab_link.commands.rewrite import rewrite_file_command

__all__ = [
    "preprocess_command",
    "rewrite_file_command",
]
