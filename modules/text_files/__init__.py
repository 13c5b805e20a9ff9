"""
Text files module for Arquivo.

Provides read, append, write and create operations on plain text files.
"""

from .file_ops import TextFileOperator

__all__ = ['TextFileOperator']
