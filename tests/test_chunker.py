# tests/test_chunker.py
"""Tests for the sentence-aware text chunker."""

import pytest

from corpusvault.chunker import TextChunker


@pytest.fixture
def chunker():
    return TextChunker(chunk_size=1000, chunk_overlap=200)


class TestTextChunkerConfig:
    def test_defaults(self):
        chunker = TextChunker()
        assert chunker.chunk_size == 1000
        assert chunker.chunk_overlap == 200
        assert chunker.sentence_search_ratio == 0.3

    def test_overlap_must_be_smaller_than_size(self):
        with pytest.raises(ValueError, match="chunk_overlap"):
            TextChunker(chunk_size=100, chunk_overlap=100)

    def test_size_must_be_positive(self):
        with pytest.raises(ValueError, match="chunk_size"):
            TextChunker(chunk_size=0, chunk_overlap=0)

    def test_negative_overlap_rejected(self):
        with pytest.raises(ValueError, match="chunk_overlap"):
            TextChunker(chunk_size=100, chunk_overlap=-1)

    def test_ratio_bounds(self):
        with pytest.raises(ValueError, match="sentence_search_ratio"):
            TextChunker(sentence_search_ratio=1.0)


class TestTextChunkerSplit:
    def test_short_text_is_one_chunk(self, chunker):
        chunks = chunker.chunk("Short note.", source_file_name="a.txt", corpus_id="c1")

        assert len(chunks) == 1
        assert chunks[0].content == "Short note."
        assert chunks[0].start_index == 0
        assert chunks[0].end_index == len("Short note.")
        assert chunks[0].chunk_index == 0
        assert chunks[0].total_chunks == 1

    def test_empty_text_has_no_chunks(self, chunker):
        assert chunker.chunk("", source_file_name="a.txt", corpus_id="c1") == []

    def test_whitespace_only_text_has_no_chunks(self, chunker):
        assert chunker.chunk("   \n\n  ", source_file_name="a.txt", corpus_id="c1") == []

    def test_text_without_terminators_uses_fixed_windows(self, chunker):
        text = "x" * 2400

        spans = chunker.split(text)

        assert [(start, end) for start, end, _ in spans] == [
            (0, 1000),
            (800, 1800),
            (1600, 2400),
        ]

    def test_final_window_ends_the_text(self, chunker):
        text = "x" * 2400

        spans = chunker.split(text)

        assert spans[-1][1] == len(text)

    def test_snaps_to_sentence_end_in_tail(self, chunker):
        text = "x" * 850 + ". " + "y" * 1000

        spans = chunker.split(text)

        assert spans[0][1] == 851
        assert spans[0][2].endswith(".")
        assert spans[1][0] == 651

    def test_ignores_terminator_before_search_region(self, chunker):
        # A period at 500 is outside the last 30% of the window
        text = "x" * 500 + "." + "y" * 1500

        spans = chunker.split(text)

        assert spans[0][1] == 1000

    def test_search_region_includes_its_first_character(self, chunker):
        # The last 30% of a 1000-character window starts at 700
        on_edge = "x" * 700 + "." + "y" * 1299
        just_outside = "x" * 699 + "." + "y" * 1300

        assert chunker.split(on_edge)[0][1] == 701
        assert chunker.split(just_outside)[0][1] == 1000

    def test_other_terminators(self, chunker):
        for terminator in "?!":
            text = "x" * 900 + terminator + "y" * 500
            assert chunker.split(text)[0][1] == 901

    def test_consecutive_windows_overlap(self, chunker):
        text = "word " * 600

        spans = chunker.split(text)

        for (_, prev_end, _), (start, _, _) in zip(spans, spans[1:], strict=False):
            assert start < prev_end

    def test_windows_cover_whole_text(self, chunker):
        text = "Sentence number one is here. " * 120

        spans = chunker.split(text)

        assert spans[0][0] == 0
        assert spans[-1][1] == len(text)
        for (_, prev_end, _), (start, _, _) in zip(spans, spans[1:], strict=False):
            assert start <= prev_end

    def test_chunks_never_exceed_window(self, chunker):
        text = "Sentence number one is here. " * 120

        for start, end, content in chunker.split(text):
            assert end - start <= 1000
            assert len(content) <= 1000

    def test_content_is_trimmed(self):
        chunker = TextChunker(chunk_size=10, chunk_overlap=2, sentence_search_ratio=0.0)

        spans = chunker.split("  abcdefgh  ijklmnop")

        assert spans[0][2] == "abcdefgh"
        assert spans[0][:2] == (0, 10)

    def test_chunk_metadata(self, chunker):
        text = "x" * 2400

        chunks = chunker.chunk(text, source_file_name="big.txt", corpus_id="c9")

        assert [c.chunk_index for c in chunks] == [0, 1, 2]
        assert all(c.total_chunks == 3 for c in chunks)
        assert all(c.source_file_name == "big.txt" for c in chunks)
        assert all(c.corpus_id == "c9" for c in chunks)
        assert len({c.id for c in chunks}) == 3

    def test_small_window_always_advances(self):
        chunker = TextChunker(chunk_size=5, chunk_overlap=4, sentence_search_ratio=0.9)

        spans = chunker.split("a. b. c. d. e. f.")

        starts = [start for start, _, _ in spans]
        assert starts == sorted(set(starts))
        assert spans[-1][1] == len("a. b. c. d. e. f.")
