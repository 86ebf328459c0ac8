"""Tests for tolerant JSON extraction from model replies."""

import json

import pytest

from importer_intel.errors import MalformedResponseError
from importer_intel.services.sanitizer import clean_json_string, extract_json, extract_json_or_empty

OBJECT = {"importers": [{"importerName": "Acme Imports Inc", "location": "Los Angeles, CA"}]}


class TestCleanJsonString:
    def test_strips_json_fence(self):
        text = f"```json\n{json.dumps(OBJECT)}\n```"
        assert clean_json_string(text) == json.dumps(OBJECT)

    def test_slices_outermost_braces(self):
        assert clean_json_string('Sure! {"a": {"b": 1}} Hope that helps.') == '{"a": {"b": 1}}'

    def test_no_braces_returns_trimmed_text(self):
        assert clean_json_string("  nothing here  ") == "nothing here"


class TestExtractJson:
    @pytest.mark.parametrize(
        "wrapper",
        [
            "{}",
            "```json\n{}\n```",
            "```\n{}\n```",
            "Here is the data you asked for:\n{}\nLet me know if you need more.",
            "```json\nBased on my search, {} is the result.\n```",
        ],
    )
    def test_returns_embedded_object(self, wrapper):
        text = wrapper.replace("{}", json.dumps(OBJECT))
        assert extract_json(text) == OBJECT

    def test_no_braces_returns_empty(self):
        assert extract_json("I could not find any importers matching that query.") == {}

    def test_empty_and_none_return_empty(self):
        assert extract_json("") == {}
        assert extract_json(None) == {}

    def test_invalid_json_raises(self):
        with pytest.raises(MalformedResponseError, match="not in the expected JSON format"):
            extract_json("{importerName: Acme, }")

    def test_two_sibling_objects_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            extract_json('{"a": 1} and also {"b": 2}')

    def test_malformed_is_a_value_error(self):
        with pytest.raises(ValueError):
            extract_json("{not json}")


class TestExtractJsonOrEmpty:
    def test_valid_passes_through(self):
        assert extract_json_or_empty(json.dumps(OBJECT)) == OBJECT

    def test_malformed_degrades_to_empty(self):
        assert extract_json_or_empty("{this is {not} json}") == {}
