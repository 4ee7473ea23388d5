"""
File group and document data structures for ERE corpora.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any
import os


@dataclass
class FileGroup:
    """
    A source file and the annotation files that belong to it.

    Behaves as the ordered sequence ``[source_file, *annotation_files]`` so callers
    written against plain path lists keep working.
    """
    source_file: str
    stem: str
    annotation_files: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not self.source_file:
            raise ValueError("File group needs a source file")

    def paths(self) -> List[str]:
        """Return the source file followed by its annotation files."""
        return [self.source_file] + list(self.annotation_files)

    def __len__(self) -> int:
        return 1 + len(self.annotation_files)

    def __iter__(self):
        return iter(self.paths())

    def __getitem__(self, index):
        return self.paths()[index]

    @property
    def has_annotations(self) -> bool:
        return bool(self.annotation_files)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'doc_id': self.stem,
            'source_file': self.source_file,
            'n_annotations': len(self.annotation_files),
            'annotation_files': ';'.join(self.annotation_files),
        }


@dataclass
class SourceDocument:
    """
    One source document after markup stripping.

    ``stripped_text`` is whatever the corpus source's stripper produced; for the ERE
    reader in its default mode it has the same length as ``original_text``.
    """
    corpus_name: str
    doc_id: str
    source_file: str
    original_text: str
    stripped_text: str
    annotation_files: List[str] = field(default_factory=list)

    @property
    def display_text(self) -> str:
        """Get formatted text for display/logging purposes."""
        preview = ' '.join(self.stripped_text[:100].split())
        return f"[{self.doc_id}] ({os.path.basename(self.source_file)}) {preview}..."

    @property
    def offsets_preserved(self) -> bool:
        return len(self.original_text) == len(self.stripped_text)
