"""
Reader utilities for ERE corpora: pairing source documents with their annotation files
and stripping XML markup from source text while keeping character offsets.
"""

from .corpus_source import CorpusSource, EREDocumentReader
from .exceptions import EREReaderError, MarkupError, CorpusLayoutError
from .file_pairer import list_file_groups
from .orchestrator import read_corpus, summarize_file_groups
from .structures import FileGroup, SourceDocument
from .text_cleaner import MarkupStripper, strip_markup, check_well_formed

__all__ = [
    'CorpusSource',
    'EREDocumentReader',
    'EREReaderError',
    'MarkupError',
    'CorpusLayoutError',
    'list_file_groups',
    'read_corpus',
    'summarize_file_groups',
    'FileGroup',
    'SourceDocument',
    'MarkupStripper',
    'strip_markup',
    'check_well_formed',
]
