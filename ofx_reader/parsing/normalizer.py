"""
Markup Normalizer

Turns raw OFX content into a parsed XML element tree:

1. Normalize line endings
2. Split header and body at the <OFX> root tag
3. Parse the header and fix the encoding
4. Convert SGML (OFX v1) bodies to XML; XML (OFX v2) bodies pass through
5. Parse the resulting markup

Failures are returned as NormalizationFailure values, not raised.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union
import xml.etree.ElementTree as ET
from ofx_reader.common.logging_config import get_logger
from .config.settings import ParserSettings, DEFAULT_SETTINGS
from .encoding import UTF8, declared_encoding, resolve_encoding
from .header import parse_header, is_xml_header
from .sgml import convert_sgml_to_xml
from .tree import TreeParser, TreeDiagnostic, ElementTreeParser

logger = get_logger(__name__)


class Dialect(Enum):
    SGML = "SGML"  # OFX 1.x
    XML = "XML"    # OFX 2.x


class FailureKind(Enum):
    ROOT_TAG_MISSING = "ROOT_TAG_MISSING"
    MALFORMED_MARKUP = "MALFORMED_MARKUP"


@dataclass(frozen=True)
class NormalizedDocument:
    """
    Well-formed OFX ready for mapping.

    Attributes:
        header: Header fields found before the root tag
        dialect: SGML (v1, converted) or XML (v2, passed through)
        markup: The XML text that was parsed
        root: Parsed <OFX> element
        source_encoding: Encoding the content was transcoded from, UTF-8 when
            it was parsed as-is
    """
    header: Dict[str, str]
    dialect: Dialect
    markup: str
    root: ET.Element
    source_encoding: str = UTF8


@dataclass(frozen=True)
class NormalizationFailure:
    kind: FailureKind
    message: str
    diagnostics: Tuple[TreeDiagnostic, ...] = field(default_factory=tuple)


NormalizationResult = Union[NormalizedDocument, NormalizationFailure]


def normalize_line_endings(content: bytes) -> bytes:
    return content.replace(b'\r\n', b'\n').replace(b'\r', b'\n')


def split_document(content: bytes, root_marker: str = '<OFX>') -> Optional[Tuple[bytes, bytes]]:
    """
    Split content at the first root marker (case-insensitive).

    Returns:
        (header, body), both stripped, or None if the marker is absent.
        The body starts with the marker itself.
    """
    m = re.search(re.escape(root_marker.encode('ascii')), content, re.IGNORECASE)
    if m is None:
        return None
    start = m.start()
    return content[:start].strip(), content[start:].strip()


def _decode_body(body: bytes) -> str:
    try:
        return body.decode('utf-8')
    except UnicodeDecodeError as e:
        logger.warning(
            "Body is not valid UTF-8 and no usable encoding was declared; replacing undecodable bytes",
            position=e.start,
        )
        return body.decode('utf-8', errors='replace')


def normalize_ofx(
    raw: Union[bytes, str],
    settings: ParserSettings = DEFAULT_SETTINGS,
    tree_parser: TreeParser = None,
) -> NormalizationResult:
    """
    Normalize raw OFX content into a parsed element tree.

    Args:
        raw: Document content; str input is encoded as UTF-8 first
        settings: Pipeline settings
        tree_parser: XML capability, ElementTreeParser by default

    Returns:
        NormalizedDocument on success, NormalizationFailure with
        ROOT_TAG_MISSING (not an OFX document) or MALFORMED_MARKUP
        (with the parser's diagnostics) otherwise
    """
    tree_parser = tree_parser or ElementTreeParser()

    content = raw.encode('utf-8', errors='replace') if isinstance(raw, str) else bytes(raw)
    content = normalize_line_endings(content)

    parts = split_document(content, settings.root_marker)
    if parts is None:
        return NormalizationFailure(FailureKind.ROOT_TAG_MISSING, f"No {settings.root_marker} root tag found")

    header_raw, body_raw = parts
    # The header is ASCII by convention; latin-1 maps every byte so it never fails
    header_text = header_raw.decode('latin-1')
    header = parse_header(header_text)
    logger.debug("Header parsed", header_keys=list(header), header_size=len(header_raw))

    source_encoding = UTF8
    converted = resolve_encoding(content, header, settings)
    if converted is not content:
        source_encoding = declared_encoding(header, settings)
        # Offsets move once multi-byte characters appear
        parts = split_document(converted, settings.root_marker)
        if parts is None:
            return NormalizationFailure(
                FailureKind.ROOT_TAG_MISSING,
                f"{settings.root_marker} root tag lost after transcoding",
            )
        header_raw, body_raw = parts
        header_text = header_raw.decode('latin-1')

    body = _decode_body(body_raw)

    if is_xml_header(header_text):
        dialect = Dialect.XML
        markup = body
    else:
        dialect = Dialect.SGML
        markup = convert_sgml_to_xml(body, settings)
    logger.debug(f"Dialect detected: {dialect.value}", dialect=dialect.value, markup_size=len(markup))

    result = tree_parser.parse(markup)
    if not result.ok:
        logger.error(
            "Recovered markup is not well-formed",
            dialect=dialect.value,
            diagnostics=[str(d) for d in result.diagnostics],
        )
        return NormalizationFailure(
            FailureKind.MALFORMED_MARKUP,
            f"Failed to parse OFX ({dialect.value} dialect)",
            tuple(result.diagnostics),
        )

    return NormalizedDocument(
        header=header,
        dialect=dialect,
        markup=markup,
        root=result.root,
        source_encoding=source_encoding,
    )
