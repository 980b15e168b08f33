# test/conftest.py

import pytest

from ssam.splitter.sampler import create_rng


@pytest.fixture
def rng():
    return create_rng(1234)


@pytest.fixture
def parallel_corpus(tmp_path):
    """Two aligned files of six lines each: a1..a6 and b1..b6."""
    src = tmp_path / "corpus.en"
    tgt = tmp_path / "corpus.ka"
    src.write_text("".join(f"a{i}\n" for i in range(1, 7)), encoding="utf-8")
    tgt.write_text("".join(f"b{i}\n" for i in range(1, 7)), encoding="utf-8")
    return src, tgt
