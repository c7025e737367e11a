"""Tests for the format classifier."""

import json

import pytest

from json_compressor.classifier import FormatClassifier
from json_compressor.codec import LZBase64Codec
from json_compressor.engine import TransformEngine
from json_compressor.types import Classification


class TestFormatClassifier:
    """Tests for FormatClassifier class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.classifier = FormatClassifier()
        self.engine = TransformEngine()
        self.codec = LZBase64Codec()

    def test_classify_object(self, scenario_json_text):
        assert self.classifier.classify(scenario_json_text) == Classification.STRUCTURED

    def test_classify_array(self, sample_list_json):
        assert self.classifier.classify(json.dumps(sample_list_json)) == Classification.STRUCTURED

    @pytest.mark.parametrize("text", ["{}", "[]", "  \n{\"a\": null}\t "])
    def test_classify_trims_and_accepts_any_composite(self, text):
        assert self.classifier.classify(text) == Classification.STRUCTURED

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_classify_blank_input(self, text):
        assert self.classifier.classify(text) == Classification.UNRECOGNIZED

    def test_classify_none(self):
        assert self.classifier.classify(None) == Classification.UNRECOGNIZED

    @pytest.mark.parametrize("text", ['"hello"', "42"])
    def test_bare_scalars_are_unrecognized(self, text):
        """Scalars are valid JSON but deliberately not treated as documents."""
        assert self.classifier.classify(text) == Classification.UNRECOGNIZED

    def test_classify_compressed_document(self, sample_dict_json):
        encoded = self.engine.compress(json.dumps(sample_dict_json))
        assert self.classifier.classify(encoded) == Classification.COMPRESSED

    def test_classify_compressed_with_surrounding_whitespace(self, scenario_json_text):
        encoded = self.engine.compress(scenario_json_text)
        assert self.classifier.classify(f"\n  {encoded}  \n") == Classification.COMPRESSED

    def test_compressed_scalar_is_recognized(self):
        """Any JSON value behind the encoding counts, scalars included."""
        encoded = self.codec.encode('"hello"')
        assert self.classifier.classify(encoded) == Classification.COMPRESSED

    def test_encoding_of_non_json_is_unrecognized(self):
        encoded = self.codec.encode("this is plain text, not json")
        assert self.classifier.classify(encoded) == Classification.UNRECOGNIZED

    @pytest.mark.parametrize("text", ["not-a-valid-encoding!!", "{broken json", "hello world!"])
    def test_garbage_is_unrecognized(self, text):
        assert self.classifier.classify(text) == Classification.UNRECOGNIZED

    def test_json_is_probed_before_decoding(self, scenario_json_text):
        """A JSON document is never handed to the decoder."""
        calls = []

        class RecordingCodec(LZBase64Codec):
            def decode(self, encoded):
                calls.append(encoded)
                return super().decode(encoded)

        classifier = FormatClassifier(codec=RecordingCodec())

        assert classifier.classify(scenario_json_text) == Classification.STRUCTURED
        assert calls == []

    def test_classification_is_idempotent(self, sample_json_texts):
        inputs = sample_json_texts + [self.engine.compress(sample_json_texts[0]), "42", "", "nope!"]
        for text in inputs:
            assert self.classifier.classify(text) == self.classifier.classify(text)

    def test_describe(self):
        assert "Ready to Compress" in self.classifier.describe(Classification.STRUCTURED, "{}")
        assert "Ready to Decompress" in self.classifier.describe(Classification.COMPRESSED, "abc")
        assert "not recognized" in self.classifier.describe(Classification.UNRECOGNIZED, "abc")
        assert self.classifier.describe(Classification.UNRECOGNIZED, "   ") == FormatClassifier.EMPTY_MESSAGE
