"""Format detection for raw input text."""

import logging
from typing import Optional

from .codec import LZBase64Codec
from .parser import JSONParser
from .types import Classification


class FormatClassifier:
    """
    Decides whether a text is a JSON document, an LZ-string encoding of one,
    or neither.

    The probes run in a fixed order: parse as JSON first, then decode and
    parse. Only objects and arrays count as JSON documents; a bare scalar such
    as ``"hello"`` or ``42`` is reported as unrecognized.
    """

    STATUS_MESSAGES = {
        Classification.COMPRESSED: "Data recognized as LZ-Compressed String. Ready to Decompress.",
        Classification.STRUCTURED: "Data recognized as Raw JSON Object. Ready to Compress.",
        Classification.UNRECOGNIZED: "Pasted data is not recognized as valid JSON or compressed format.",
    }
    EMPTY_MESSAGE = "Paste or drop data to begin."

    def __init__(self, parser: Optional[JSONParser] = None,
                 codec: Optional[LZBase64Codec] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the classifier.

        Args:
            parser: Optional JSONParser instance
            codec: Optional LZBase64Codec instance
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.parser = parser or JSONParser(self.logger)
        self.codec = codec or LZBase64Codec(self.logger)

    def classify(self, text: str) -> Classification:
        """
        Classify an input text.

        Args:
            text: Raw input text

        Returns:
            Classification of the trimmed text
        """
        trimmed = (text or "").strip()
        if not trimmed:
            return Classification.UNRECOGNIZED

        try:
            parsed = self.parser.parse(trimmed)
        except ValueError:
            pass
        else:
            if self.parser.is_composite(parsed):
                return Classification.STRUCTURED

        decoded = self.codec.decode(trimmed)
        if decoded and self.parser.is_valid(decoded):
            return Classification.COMPRESSED

        return Classification.UNRECOGNIZED

    def describe(self, classification: Classification, text: str = "") -> str:
        """Return a user-facing status message for a classification."""
        if classification == Classification.UNRECOGNIZED and not (text or "").strip():
            return self.EMPTY_MESSAGE
        return self.STATUS_MESSAGES[classification]
