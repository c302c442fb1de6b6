from pathlib import Path

import pytest

from rhyme_suffix.core.frequency_map import FrequencyMap, load_corpus
from rhyme_suffix.core.ranker import rank_top


def test_load_corpus_parses_word_frequency_lines(tmp_path: Path) -> None:
    corpus = tmp_path / "es_50k.txt"
    corpus.write_text(
        "de 1000\nCantando 40\n\nsolo\n  siendo   75  extra\nviendo abc\n",
        encoding="utf-8",
    )

    frequency_map = load_corpus(corpus)

    assert dict(frequency_map) == {"de": 1000, "cantando": 40, "siendo": 75, "viendo": 0}


def test_later_duplicates_overwrite_earlier_entries() -> None:
    frequency_map = FrequencyMap.from_lines(["casa 3", "CASA 9", "casa -4"])

    assert frequency_map["casa"] == 0

    frequency_map = FrequencyMap.from_lines(["casa 3", "Casa 9"])
    assert frequency_map["casa"] == 9


@pytest.mark.parametrize("path", [None, "", "does/not/exist.txt"])
def test_missing_corpus_yields_empty_map(path) -> None:
    frequency_map = load_corpus(path)

    assert len(frequency_map) == 0
    assert not frequency_map


def test_unreadable_corpus_yields_empty_map(tmp_path: Path) -> None:
    corpus = tmp_path / "latin1.txt"
    corpus.write_bytes("canci\xf3n 4\n".encode("latin-1"))

    assert len(load_corpus(corpus)) == 0


def test_directory_path_yields_empty_map(tmp_path: Path) -> None:
    assert len(load_corpus(tmp_path)) == 0


def test_frequency_map_is_read_only_and_defaults_to_zero() -> None:
    frequency_map = FrequencyMap({"Viendo": 5})

    assert frequency_map["viendo"] == 5
    assert frequency_map.get("nadie", 0) == 0
    with pytest.raises(TypeError):
        frequency_map["viendo"] = 6  # type: ignore[index]


def test_decomposed_corpus_words_match_composed_candidates() -> None:
    frequency_map = FrequencyMap.from_lines(["cancio\u0301n 7", "Pasio\u0301n 3"])

    assert dict(frequency_map) == {"canción": 7, "pasión": 3}
    assert rank_top(["pasión", "canción", "limón"], frequency_map) == ["canción", "pasión", "limón"]
