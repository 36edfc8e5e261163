"""
Encoding Resolver

Decides whether raw OFX content must be transcoded to UTF-8 before parsing.
Header declarations are frequently wrong (banks label UTF-8 exports as
CHARSET:1252), so content sniffing wins over the header.
"""
import re
from typing import Dict, Optional
from ofx_reader.common.logging_config import get_logger
from .config.settings import ParserSettings, DEFAULT_SETTINGS
from .exceptions import EncodingConversionError

logger = get_logger(__name__)

UTF8 = 'UTF-8'

# Lead bytes of multi-byte UTF-8 sequences
_MULTIBYTE_LEAD_RE = re.compile(rb'[\xC2-\xF4]')


def declared_encoding(header: Dict[str, str], settings: ParserSettings = DEFAULT_SETTINGS) -> Optional[str]:
    """
    Resolve the encoding declared in the header.

    ENCODING is checked first but only decides for UTF-8 (v1 files usually say
    ENCODING:USASCII and put the real code page in CHARSET). Returns None when
    nothing recognizable is declared.
    """
    encoding = (header.get('ENCODING') or '').strip().upper()
    if encoding:
        declared = settings.encoding_aliases.get(encoding)
        if declared is not None:
            return declared

    charset = (header.get('CHARSET') or '').strip().upper()
    if charset:
        return settings.charset_aliases.get(charset)

    return None


def looks_like_utf8(content: bytes) -> bool:
    """True if content is valid UTF-8 and has at least one multi-byte sequence."""
    try:
        content.decode('utf-8')
    except UnicodeDecodeError:
        return False
    return _MULTIBYTE_LEAD_RE.search(content) is not None


def transcode_to_utf8(content: bytes, source_encoding: str) -> bytes:
    """
    Convert content from source_encoding to UTF-8.

    Raises:
        EncodingConversionError: if the codec is unknown, the bytes are not
            valid in source_encoding, or the result is empty
    """
    try:
        converted = content.decode(source_encoding).encode('utf-8')
    except (LookupError, UnicodeError) as e:
        raise EncodingConversionError(source_encoding, str(e)) from e

    if not converted:
        raise EncodingConversionError(source_encoding, "conversion produced no output")
    return converted


def resolve_encoding(content: bytes, header: Dict[str, str], settings: ParserSettings = DEFAULT_SETTINGS) -> bytes:
    """
    Return content as it should be parsed: unchanged, or transcoded to UTF-8.

    1. Already UTF-8 with multi-byte characters -> unchanged, whatever the header says.
    2. Declared non-UTF-8 encoding -> transcoded once; on failure the original
       bytes are kept.
    3. Otherwise (plain ASCII, undetermined) -> unchanged.
    """
    if looks_like_utf8(content):
        return content

    declared = declared_encoding(header, settings)
    if declared is None or declared == UTF8:
        return content

    try:
        converted = transcode_to_utf8(content, declared)
    except EncodingConversionError as e:
        logger.warning(f"Keeping original bytes: {e.message}", source_encoding=declared)
        return content

    logger.info(f"Transcoded content from {declared} to UTF-8", source_encoding=declared, size=len(converted))
    return converted
