"""
OFX Reader

Public entry point: raw OFX content in, ParsedDocument out.
"""
from typing import Optional, Union
from ofx_reader.common.logging_config import get_logger
from ofx_reader.common.models import ParsedDocument
from .config.settings import ParserSettings, DEFAULT_SETTINGS
from .exceptions import MalformedMarkupError, RootTagMissingError
from .mapper import DocumentMapper
from .normalizer import FailureKind, NormalizationFailure, normalize_ofx
from .tree import TreeParser, ElementTreeParser

logger = get_logger(__name__)


class OFXReader:
    """
    Reads OFX v1 (SGML) and v2 (XML) documents.

    Example:
        reader = OFXReader()
        document = reader.read(raw_bytes)
        if document is None:
            ...  # not an OFX file
    """

    def __init__(self, settings: ParserSettings = DEFAULT_SETTINGS, tree_parser: TreeParser = None):
        self.settings = settings
        self.tree_parser = tree_parser or ElementTreeParser()
        self.mapper = DocumentMapper(settings)

    def read(self, raw: Union[bytes, str], strict: bool = False) -> Optional[ParsedDocument]:
        """
        Parse a document.

        Args:
            raw: Document content
            strict: Raise RootTagMissingError instead of returning None when
                the content has no <OFX> root tag

        Returns:
            ParsedDocument, or None if the content is not an OFX document

        Raises:
            MalformedMarkupError: the markup could not be made well-formed
            InvalidDateError: a required date is missing or unreadable
        """
        result = normalize_ofx(raw, self.settings, self.tree_parser)

        if isinstance(result, NormalizationFailure):
            if result.kind is FailureKind.ROOT_TAG_MISSING:
                logger.info(f"Not an OFX document: {result.message}")
                if strict:
                    raise RootTagMissingError(result.message)
                return None
            raise MalformedMarkupError(result.message, result.diagnostics)

        logger.debug(
            "Document normalized",
            dialect=result.dialect.value,
            source_encoding=result.source_encoding,
        )
        return self.mapper.map(result.root)


def parse(
    raw: Union[bytes, str],
    settings: ParserSettings = DEFAULT_SETTINGS,
    tree_parser: TreeParser = None,
) -> Optional[ParsedDocument]:
    """Parse OFX content; None means the content is not an OFX document."""
    return OFXReader(settings, tree_parser).read(raw)
