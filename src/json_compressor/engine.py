"""Compress and decompress transforms shared by every execution strategy."""

import logging
from typing import Optional

from .codec import LZBase64Codec
from .parser import JSONParser
from .types import (
    Action,
    ErrorType,
    ProcessingError,
    TransformEngineInterface,
    TransformRequest,
    TransformResult,
)


class TransformEngine(TransformEngineInterface):
    """
    Stateless compress/decompress pair.

    ``compress`` turns a JSON document into a compact LZ-string encoding and
    ``decompress`` reverses it into pretty-printed JSON. Both raise
    :class:`ProcessingError`; :meth:`execute` is the non-raising entry point
    used by the inline path and by the worker endpoint alike.
    """

    def __init__(self, parser: Optional[JSONParser] = None,
                 codec: Optional[LZBase64Codec] = None,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.parser = parser or JSONParser(self.logger)
        self.codec = codec or LZBase64Codec(self.logger)

    def compress(self, structured_text: str) -> str:
        """
        Compress a JSON document.

        Args:
            structured_text: JSON text to compress

        Returns:
            Base64-alphabet LZ-string encoding of the compact serialization

        Raises:
            ProcessingError: INVALID_STRUCTURED_INPUT if the text is not JSON
        """
        try:
            data = self.parser.parse(structured_text)
        except ValueError as e:
            raise ProcessingError(str(e), ErrorType.INVALID_STRUCTURED_INPUT)

        compact = self.parser.serialize_compact(data)
        encoded = self.codec.encode(compact)
        self.logger.debug(f"Compressed {len(compact)} chars into {len(encoded)} chars")
        return encoded

    def decompress(self, encoded_text: str) -> str:
        """
        Decompress an LZ-string encoding.

        Args:
            encoded_text: Base64-alphabet LZ-string encoding

        Returns:
            Pretty-printed JSON text

        Raises:
            ProcessingError: DECODE_FAILURE if the decoder yields nothing,
                INVALID_DECODED_CONTENT if the decoded text is not JSON
        """
        decoded = self.codec.decode(encoded_text)
        if not decoded:
            raise ProcessingError("Decompression returned no data or failed.", ErrorType.DECODE_FAILURE)

        try:
            data = self.parser.parse(decoded)
        except ValueError as e:
            raise ProcessingError(f"Decompressed data is not valid JSON: {e}",
                                  ErrorType.INVALID_DECODED_CONTENT)

        return self.parser.serialize_pretty(data)

    def execute(self, request: TransformRequest) -> TransformResult:
        """
        Run a request and capture processing failures in the result.

        Args:
            request: TransformRequest to run

        Returns:
            TransformResult holding either the output or the failure reason
        """
        try:
            if request.action == Action.COMPRESS:
                output = self.compress(request.payload)
            elif request.action == Action.DECOMPRESS:
                output = self.decompress(request.payload)
            else:
                raise ProcessingError("Invalid action provided.", ErrorType.INVALID_REQUEST)
        except ProcessingError as e:
            self.logger.info(f"Transform failed: {e.error_type.value} - {e}")
            return TransformResult.failure(e.error_type, str(e))
        except Exception as e:
            self.logger.exception(f"Unexpected error during transform: {e}")
            return TransformResult(success=False, error=str(e) or "Processing failed.")

        return TransformResult.ok(output)
