import logging
from typing import List, Protocol, runtime_checkable

from ere_reader.config_loader import load_config, DEFAULT_CONFIG_FILE
from ere_reader.file_pairer import list_file_groups
from ere_reader.structures import FileGroup
from ere_reader.text_cleaner import MarkupStripper, check_well_formed


@runtime_checkable
class CorpusSource(Protocol):
    """What a corpus must provide to be read by :func:`ere_reader.orchestrator.read_corpus`."""

    corpus_name: str

    def get_source_directory(self) -> str:
        ...

    def list_file_groups(self) -> List[FileGroup]:
        ...

    def strip_markup(self, original: str) -> str:
        ...


class EREDocumentReader:
    """
    Corpus source for ERE corpora.

    The corpus root holds two directories: ``data/source/`` with the original text in XML
    and ``data/ere/`` with annotation files. Annotation files relate many-to-one to source
    files and share the source file's stem as a prefix.

    Source text is stripped of all XML markup except the author attributes of ``post`` and
    ``quote`` tags (by default), keeping every remaining character at its original offset.
    """

    def __init__(self, corpus_name, source_directory, config_file=DEFAULT_CONFIG_FILE, config_dir=None,
                 required_file_extension=None, retain_tags=None, retain_attributes=None, keep_offsets=None,
                 claim_once=None, strict_layout=None, logger=None):
        """
        Initializes the reader. Keyword arguments left as None take their value from the
        configuration file.

        :param corpus_name: the name of the corpus, this can be anything.

        :param source_directory: the corpus root, containing data/source/ and data/ere/.

        :param config_file: configuration file name.

        :param config_dir: optional directory holding a user override of the configuration file.

        :param logger: optional logger.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.config = load_config(config_file, user_config_dir=config_dir)

        self.corpus_name = corpus_name
        self.source_directory = source_directory

        extension = self._option('required_file_extension', required_file_extension)
        if not isinstance(extension, str) or not extension:
            raise ValueError(f"Invalid required file extension: {extension!r}")
        self._required_file_extension = extension

        self.source_subdir = self.config['source_subdir']
        self.annotation_subdir = self.config['annotation_subdir']
        self.claim_once = bool(self._option('claim_once', claim_once))
        self.strict_layout = bool(self._option('strict_layout', strict_layout))
        self.report_malformed = bool(self.config.get('report_malformed', False))
        self.encoding = self.config.get('encoding', 'utf-8')

        self.stripper = MarkupStripper(
            retain_tags=self._option('retain_tags', retain_tags),
            retain_attributes=self._option('retain_attributes', retain_attributes),
            keep_offsets=self._option('keep_offsets', keep_offsets),
            logger=self.logger,
        )
        self.logger.info(f"EREDocumentReader initialized for corpus '{corpus_name}' at {source_directory}. "
                         f"Stripper: {self.stripper}")

    def _option(self, key, value):
        return value if value is not None else self.config[key]

    @property
    def required_file_extension(self):
        """Exclude any files not possessing this extension."""
        return self._required_file_extension

    def get_source_directory(self):
        return self.source_directory

    def list_file_groups(self):
        """
        Generate one FileGroup per source file: the source file first, then its annotation files.

        :return: list of FileGroup.
        """
        return list_file_groups(
            self.get_source_directory(),
            extension=self.required_file_extension,
            source_subdir=self.source_subdir,
            annotation_subdir=self.annotation_subdir,
            claim_once=self.claim_once,
            strict_layout=self.strict_layout,
            logger=self.logger,
        )

    def strip_markup(self, original):
        """
        Strip all XML markup, but leave all the text content and the retained attribute
        values, keeping the same offset for all remaining text content when configured to.

        :param original: the original text string.

        :return: the stripped text.
        """
        if self.report_malformed:
            problems = check_well_formed(original)
            if problems:
                self.logger.warning(f"Document is not well-formed XML ({len(problems)} problems), "
                                    f"stripping best-effort. First problem: {problems[0]}")
        return self.stripper.strip(original)

    # Names used by the generic document reading loop.
    get_file_listing = list_file_groups
    strip_text = strip_markup
