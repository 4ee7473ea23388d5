import os
import pytest
import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s"
)

@pytest.fixture
def get_test_data_path():
    def _get_path(filename):
        return os.path.join(os.path.dirname(__file__), 'test_data', filename)
    return _get_path

@pytest.fixture
def make_corpus(tmp_path):
    """Build an ERE corpus under tmp_path from lists of source and annotation file names."""
    def _make(source_files, annotation_files, source_text='<doc>text</doc>', with_annotation_dir=True):
        root = tmp_path / 'corpus'
        source_dir = root / 'data' / 'source'
        source_dir.mkdir(parents=True)
        for name in source_files:
            path = source_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source_text, encoding='utf-8')
        if with_annotation_dir:
            annotation_dir = root / 'data' / 'ere'
            annotation_dir.mkdir(parents=True)
            for name in annotation_files:
                path = annotation_dir / name
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text('<deft_ere/>', encoding='utf-8')
        return str(root)
    return _make
