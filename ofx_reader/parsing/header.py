"""
OFX Header Parser

Parses the area before the <OFX> root tag into a key/value dict. Two forms:

    OFX v1 (one KEY:VALUE per line)      OFX v2 (XML prolog + processing instruction)
    OFXHEADER:100                        <?xml version="1.0" encoding="UTF-8"?>
    DATA:OFXSGML                         <?OFX OFXHEADER="200" VERSION="211" SECURITY="NONE"
    CHARSET:1252                              OLDFILEUID="NONE" NEWFILEUID="NONE"?>
"""
import re
from typing import Dict

XML_PROLOG_RE = re.compile(r'^<\?xml', re.IGNORECASE)

_XML_DECL_RE = re.compile(r'<\?xml .*?\?>\s*', re.IGNORECASE)
_OFX_PI_OPEN_RE = re.compile(r'<\?OFX\s*', re.IGNORECASE)
_PI_CLOSE_RE = re.compile(r'\?>\s*')
_BLANK_LINE_RE = re.compile(r'^\s*$', re.MULTILINE)

_VALUE_STRIP = " \t\n\r\0\x0b\"'"


def is_xml_header(text: str) -> bool:
    """True when the header starts with an XML declaration (OFX v2)."""
    return XML_PROLOG_RE.match(text) is not None


def parse_header(text: str) -> Dict[str, str]:
    """
    Parse an OFX header into a dict. Never raises; unparseable parts are skipped.

    Keys keep their original case and a repeated key keeps its last value.
    """
    text = _BLANK_LINE_RE.sub('', text.strip())

    if is_xml_header(text):
        return _parse_xml_header(text)
    return _parse_line_header(text)


def _parse_xml_header(text: str) -> Dict[str, str]:
    header = {}

    text = _XML_DECL_RE.sub('', text)
    text = _OFX_PI_OPEN_RE.sub('', text)
    text = _PI_CLOSE_RE.sub('', text)
    text = text.strip()

    for token in text.split():
        key, sep, value = token.partition('=')
        if not sep:
            continue
        key = key.strip()
        if key:
            header[key] = value.strip(_VALUE_STRIP)

    return header


def _parse_line_header(text: str) -> Dict[str, str]:
    header = {}

    for line in text.split('\n'):
        line = line.strip()
        if not line:
            continue
        key, sep, value = line.partition(':')
        if not sep:
            continue
        key = key.strip()
        if key:
            header[key] = value.strip()

    return header
