import logging
import os

from ere_reader.exceptions import CorpusLayoutError
from ere_reader.structures import FileGroup

SOURCE_SUBDIR = os.path.join('data', 'source')
ANNOTATION_SUBDIR = os.path.join('data', 'ere')


def ls_files_recursive(directory, extension):
    """
    List files under ``directory`` whose name ends with ``extension``.

    Directories and file names are visited in sorted order so repeated runs agree.

    :return: paths relative to ``directory``.
    """
    found = []
    for dirpath, dirnames, filenames in os.walk(directory, onerror=_raise):
        dirnames.sort()
        for filename in sorted(filenames):
            if filename.endswith(extension):
                found.append(os.path.relpath(os.path.join(dirpath, filename), directory))
    return found


def _raise(error):
    raise error


def file_stem(path, extension):
    """Return the file name of ``path`` without ``extension``."""
    name = os.path.basename(path)
    return name[:-len(extension)] if name.endswith(extension) else name


def _check_layout(corpus_root, subdir, required, strict_layout, logger):
    directory = os.path.join(corpus_root, subdir)
    if os.path.isdir(directory):
        return directory
    if not strict_layout:
        logger.debug(f"No {subdir} directory under {corpus_root}")
        return None
    if required:
        raise CorpusLayoutError(f"Corpus root {corpus_root} has no {subdir} directory")
    logger.warning(f"Corpus root {corpus_root} has no {subdir} directory, source files will have no annotations")
    return None


def list_file_groups(corpus_root, extension='.xml', source_subdir=SOURCE_SUBDIR, annotation_subdir=ANNOTATION_SUBDIR,
                     claim_once=True, strict_layout=True, logger=None):
    """
    Pair each source file of an ERE corpus with its annotation files.

    Source files live under ``data/source/`` and annotation files under ``data/ere/``. An
    annotation file belongs to a source file when its name starts with the source file's
    stem, so one source file may own several annotation files.

    :param corpus_root: corpus root directory.

    :param extension: only files ending with this suffix are considered.

    :param claim_once: each annotation file goes to one source file only. Stems are matched
        longest first so ``doc10_x.xml`` goes to ``doc10`` rather than ``doc1``. With
        False, every source file takes every annotation file its stem prefixes.

    :param strict_layout: raise CorpusLayoutError when the source directory is missing and
        warn when the annotation directory is missing. With False, missing directories are
        treated as empty.

    :return: list of FileGroup, one per source file, in source listing order.
    """
    logger = logger or logging.getLogger(__name__)
    if not extension:
        raise ValueError("A non-empty file extension is required")
    if not os.path.isdir(corpus_root):
        if os.path.exists(corpus_root):
            raise NotADirectoryError(f"Corpus root is not a directory: {corpus_root}")
        raise FileNotFoundError(f"Corpus root does not exist: {corpus_root}")

    source_dir = _check_layout(corpus_root, source_subdir, True, strict_layout, logger)
    annotation_dir = _check_layout(corpus_root, annotation_subdir, False, strict_layout, logger)

    source_files = [os.path.join(source_dir, f) for f in ls_files_recursive(source_dir, extension)] if source_dir else []
    annotation_files = ls_files_recursive(annotation_dir, extension) if annotation_dir else []
    logger.info(f"Found {len(source_files)} source files and {len(annotation_files)} annotation files "
                f"with extension {extension} under {corpus_root}")

    stems = [file_stem(f, extension) for f in source_files]
    matches = [[] for _ in source_files]
    unclaimed = list(annotation_files)

    order = range(len(source_files))
    if claim_once:
        order = sorted(order, key=lambda i: len(stems[i]), reverse=True)

    for i in order:
        for ann_file in unclaimed:
            if os.path.basename(ann_file).startswith(stems[i]):
                matches[i].append(ann_file)
        if claim_once and matches[i]:
            claimed = set(matches[i])
            unclaimed = [f for f in unclaimed if f not in claimed]

    groups = []
    for source_file, stem, anns in zip(source_files, stems, matches):
        group = FileGroup(source_file, stem, [os.path.join(annotation_dir, f) for f in anns])
        if not group.has_annotations:
            logger.debug(f"No annotation files for {source_file}")
        groups.append(group)

    if claim_once and unclaimed:
        logger.warning(f"{len(unclaimed)} annotation files match no source file: {unclaimed[:5]}")
    return groups
