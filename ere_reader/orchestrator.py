import logging

import pandas as pd

from ere_reader.exceptions import MarkupError
from ere_reader.structures import SourceDocument


def read_corpus(source, encoding='utf-8', fail_fast=False, logger=None):
    """
    Read every document of a corpus source and strip its markup.

    Documents are independent: a document that cannot be read or stripped is logged and
    skipped, unless ``fail_fast`` is set, in which case the error propagates.

    :param source: any object implementing the CorpusSource protocol.

    :param encoding: encoding of the source files. Line endings are kept as they are so
        that offsets match the file on disk.

    :param fail_fast: re-raise the first per-document error.

    :return: iterator of SourceDocument.
    """
    logger = logger or logging.getLogger(__name__)
    groups = source.list_file_groups()
    logger.info(f"Reading {len(groups)} documents from corpus '{source.corpus_name}'")

    n_read = 0
    for group in groups:
        logger.debug(f"Reading {group.source_file} with {len(group.annotation_files)} annotation files")
        try:
            with open(group.source_file, 'r', encoding=encoding, newline='') as f:
                original = f.read()
            stripped = source.strip_markup(original)
        except (OSError, UnicodeDecodeError, MarkupError) as e:
            if fail_fast:
                raise
            logger.error(f"Skipping {group.source_file}: {e}")
            continue
        n_read += 1
        yield SourceDocument(
            corpus_name=source.corpus_name,
            doc_id=group.stem,
            source_file=group.source_file,
            original_text=original,
            stripped_text=stripped,
            annotation_files=list(group.annotation_files),
        )

    logger.info(f"Read {n_read} of {len(groups)} documents from corpus '{source.corpus_name}'")


def summarize_file_groups(groups):
    """
    One row per file group: doc_id, source_file, n_annotations and the annotation files
    joined with ';'.
    """
    columns = ['doc_id', 'source_file', 'n_annotations', 'annotation_files']
    return pd.DataFrame([group.to_dict() for group in groups], columns=columns)
