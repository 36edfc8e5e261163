"""
SGML to XML Converter

OFX v1 bodies are SGML: aggregates (<STMTTRN>...</STMTTRN>) are closed but
data elements (<TRNAMT>-12.50) are not. This module turns such a body into
well-formed XML without a DTD:

- bare "&" are escaped
- "<TAG>value" lines get their closing tag
- an explicit stack closes aggregates and turns tags that are never closed
  into empty elements (<TAG/>)
"""
import re
from typing import List, Tuple
from .config.settings import ParserSettings, DEFAULT_SETTINGS

_BARE_AMPERSAND_RE = re.compile(r'&(?!#?[a-z0-9]+;)', re.IGNORECASE)
_INLINE_CONTENT_RE = re.compile(r'^<([A-Za-z0-9.]+)>([^<]+)$')
_TAG_LINE_RE = re.compile(r'^<(/?[A-Za-z0-9.]+)>$')
_BARE_TAG_RE = re.compile(r'^<([A-Za-z0-9.]+)>$')


def escape_ampersands(text: str) -> str:
    """Escape "&" that do not start an entity or character reference."""
    return _BARE_AMPERSAND_RE.sub('&amp;', text)


def close_unclosed_tag(line: str, settings: ParserSettings = DEFAULT_SETTINGS) -> str:
    """
    Close a data element that carries its value on the same line.

        "<NAME>ACME CORP"  -> "<NAME>ACME CORP</NAME>"
        "<MEMO>"           -> "<MEMO></MEMO>"   (configured empty leaf)

    Lines that already contain another "<" after the value are left alone.
    """
    line = line.strip()

    bare = _BARE_TAG_RE.match(line)
    if bare and bare.group(1) in settings.empty_leaf_tags:
        tag = bare.group(1)
        return f"<{tag}></{tag}>"

    m = _INLINE_CONTENT_RE.match(line)
    if m:
        tag, content = m.groups()
        return f"<{tag}>{content}</{tag}>"

    return line


def convert_sgml_to_xml(sgml: str, settings: ParserSettings = DEFAULT_SETTINGS) -> str:
    """
    Convert an OFX v1 body into an XML string.

    Tags opened on a line of their own are tracked on a stack of
    (line_index, tag). A closing tag unwinds the stack to its opener; every
    tag popped on the way was never closed and becomes "<TAG/>" on its
    original line. Tags still open at the end are rewritten the same way.
    Anything that appeared between such a tag and the enclosing close is kept
    as-is, so values of an unclosed aggregate end up as its siblings.

    Lines are stripped and joined without separator.
    """
    sgml = escape_ampersands(sgml)

    lines = sgml.split('\n')
    stack: List[Tuple[int, str]] = []

    for i, line in enumerate(lines):
        line = close_unclosed_tag(line, settings)
        lines[i] = line

        m = _TAG_LINE_RE.match(line)
        if not m:
            continue

        name = m.group(1)
        if name.startswith('/'):
            tag = name[1:]
            while stack:
                index, opened = stack.pop()
                if opened == tag:
                    break
                lines[index] = f"<{opened}/>"
        else:
            stack.append((i, name))

    while stack:
        index, opened = stack.pop()
        lines[index] = f"<{opened}/>"

    return ''.join(line.strip() for line in lines)
