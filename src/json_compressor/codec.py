"""The fixed compression scheme: LZ-string with the base64 alphabet."""

import logging
from typing import Optional

from lzstring import LZString


def to_code_units(text: str) -> str:
    """
    Split characters above U+FFFF into UTF-16 surrogate pairs.

    ``lzstring`` writes each character as at most 16 bits, like the
    JavaScript library that works on UTF-16 code units.
    """
    units = []
    for char in text:
        code_point = ord(char)
        if code_point > 0xFFFF:
            code_point -= 0x10000
            units.append(chr(0xD800 + (code_point >> 10)))
            units.append(chr(0xDC00 + (code_point & 0x3FF)))
        else:
            units.append(char)
    return ''.join(units)


def from_code_units(units: str) -> str:
    """Join surrogate pairs back into single characters; lone surrogates are kept."""
    return units.encode('utf-16-le', 'surrogatepass').decode('utf-16-le', 'surrogatepass')


class LZBase64Codec:
    """
    Thin wrapper around ``lzstring`` exposing the base64 encode/decode pair.

    Output is interchangeable with the JavaScript ``lz-string`` functions
    ``compressToBase64`` and ``decompressFromBase64``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._lz = LZString()

    def encode(self, text: str) -> str:
        """Compress text into a printable base64-alphabet string."""
        return self._lz.compressToBase64(to_code_units(text))

    def decode(self, encoded: str) -> Optional[str]:
        """
        Decompress a base64-alphabet string.

        Returns:
            The decoded text, or None if the input does not decode. Characters
            outside the alphabet and truncated streams make the decoder raise;
            those are reported as None as well.
        """
        try:
            decoded = self._lz.decompressFromBase64(encoded)
        except Exception as e:
            self.logger.debug(f"LZ-string decode failed: {type(e).__name__}: {e}")
            return None
        if decoded is None:
            return None
        return from_code_units(decoded)
