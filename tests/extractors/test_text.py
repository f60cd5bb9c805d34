# tests/extractors/test_text.py
"""Tests for the text and JSON extractors."""

import json

import pytest

from corpusvault.exceptions import ExtractionError
from corpusvault.extractors import Extractor, JSONExtractor, TextExtractor


class TestTextExtractor:
    def test_is_extractor(self):
        assert isinstance(TextExtractor(), Extractor)

    def test_supports_text_types(self):
        extractor = TextExtractor()
        for media_type in ["text/plain", "text/markdown", "text/x-markdown", "text/csv"]:
            assert extractor.supports(media_type)
        assert not extractor.supports("application/pdf")

    def test_decodes_utf8(self):
        text = TextExtractor().extract("Grüße aus Köln".encode(), "greeting.txt")
        assert text == "Grüße aus Köln"

    def test_strips_bom(self):
        text = TextExtractor().extract(b"\xef\xbb\xbfhello", "bom.txt")
        assert text == "hello"

    def test_replaces_invalid_bytes(self):
        text = TextExtractor().extract(b"ok \xff\xfe done", "broken.txt")
        assert text.startswith("ok ")
        assert text.endswith(" done")
        assert "�" in text

    def test_csv_is_plain_text(self):
        data = b"name,age\nalice,30\n"
        assert TextExtractor().extract(data, "people.csv") == "name,age\nalice,30\n"


class TestJSONExtractor:
    def test_supports_json(self):
        assert JSONExtractor().supports("application/json")

    def test_pretty_prints(self):
        text = JSONExtractor().extract(b'{"topic":"heart","beats":[1,2]}', "data.json")

        assert text == json.dumps({"topic": "heart", "beats": [1, 2]}, indent=2)

    def test_keeps_non_ascii(self):
        text = JSONExtractor().extract('{"city": "Zürich"}'.encode(), "city.json")
        assert "Zürich" in text

    def test_invalid_json_raises(self):
        with pytest.raises(ExtractionError, match="bad.json"):
            JSONExtractor().extract(b"{not json", "bad.json")
