class EREReaderError(Exception):
    """Base class for errors raised by ere_reader."""


class MarkupError(EREReaderError, ValueError):
    """Raised when a document cannot be read as XML markup at all."""

    def __init__(self, message, offset=None):
        super().__init__(message)
        self.offset = offset


class CorpusLayoutError(EREReaderError, FileNotFoundError):
    """Raised when a corpus root lacks one of its expected subdirectories."""
