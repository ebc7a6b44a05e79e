#!/usr/bin/env python3
"""
Character set conversion for feed documents.

Feeds declare their encoding in the XML declaration and quite often lie or
use names the XML parser does not know. ``CharsetReader`` re-encodes any
declared non-UTF-8 document to UTF-8 through Python's codec registry and
rewrites the declaration to match, so the decoders only ever see UTF-8.
"""

import codecs
import logging
import re
from typing import Protocol

logger = logging.getLogger(__name__)

_XML_DECLARATION = re.compile(
    br'^(\s*<\?xml[^>]*?encoding\s*=\s*["\'])([A-Za-z0-9._:\-]+)(["\'])',
    re.IGNORECASE
)

# C0 controls other than tab, newline and carriage return are never valid XML
_CONTROL_BYTES = re.compile(br'[\x00-\x08\x0b\x0c\x0e-\x1f]')

_UTF8_NAMES = {'utf-8', 'utf_8', 'utf8'}


class CharsetReaderProtocol(Protocol):
    def to_utf8(self, data: bytes) -> bytes:
        ...


class CharsetReader:
    """Converts declared document encodings to UTF-8."""

    def to_utf8(self, data: bytes) -> bytes:
        """
        Return ``data`` as UTF-8 bytes.

        Undecodable bytes are replaced rather than rejected.

        Raises:
            LookupError: If the declared encoding is unknown
        """
        if data.startswith(codecs.BOM_UTF8):
            data = data[len(codecs.BOM_UTF8):]
        elif data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
            data = self._declare_utf8(data.decode('utf-16').encode('utf-8'))

        match = _XML_DECLARATION.match(data)
        if match is not None:
            declared = match.group(2).decode('ascii').lower()
            if declared not in _UTF8_NAMES:
                codec = codecs.lookup(declared)
                if codec.name.startswith(('utf-16', 'utf-32')):
                    # an ASCII-readable declaration cannot really be UTF-16/32
                    data = self._declare_utf8(data)
                elif codec.name != 'utf-8':
                    logger.debug(f"Converting document from {codec.name} to utf-8")
                    data = self._declare_utf8(data.decode(codec.name, errors='replace').encode('utf-8'))

        return _CONTROL_BYTES.sub(b'', data)

    @staticmethod
    def _declare_utf8(data: bytes) -> bytes:
        return _XML_DECLARATION.sub(br'\g<1>utf-8\g<3>', data, count=1)
