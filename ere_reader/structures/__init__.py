"""
Data structures for the ERE reader.

This module provides the file group pairing a source document with its
annotation files, and the record produced for each document read.
"""

from .corpus import FileGroup, SourceDocument

__all__ = [
    'FileGroup',
    'SourceDocument'
]
