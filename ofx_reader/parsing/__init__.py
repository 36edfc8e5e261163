"""
OFX Parsing Module

This module consolidates the OFX reading pipeline:
- Header parsing and encoding repair
- SGML (OFX v1) to XML conversion
- Mapping into the domain model
- Source parser for the reconciliation workflow
"""

# Configuration
from .config import ParserSettings, DEFAULT_SETTINGS, load_settings

# Errors
from .exceptions import (
    OFXError,
    RootTagMissingError,
    EncodingConversionError,
    MalformedMarkupError,
    InvalidDateError,
)

# Pipeline stages
from .header import parse_header
from .encoding import declared_encoding, resolve_encoding
from .sgml import convert_sgml_to_xml, escape_ampersands
from .tree import TreeParser, TreeParseResult, TreeDiagnostic, ElementTreeParser
from .normalizer import (
    Dialect,
    FailureKind,
    NormalizedDocument,
    NormalizationFailure,
    normalize_ofx,
)
from .dates import parse_ofx_date
from .mapper import DocumentMapper, map_document

# Entry points
from .reader import OFXReader, parse
from .base import BaseParser
from .sources.ofx import OfxParser

__all__ = [
    # Config
    'ParserSettings',
    'DEFAULT_SETTINGS',
    'load_settings',
    # Errors
    'OFXError',
    'RootTagMissingError',
    'EncodingConversionError',
    'MalformedMarkupError',
    'InvalidDateError',
    # Stages
    'parse_header',
    'declared_encoding',
    'resolve_encoding',
    'convert_sgml_to_xml',
    'escape_ampersands',
    'TreeParser',
    'TreeParseResult',
    'TreeDiagnostic',
    'ElementTreeParser',
    'Dialect',
    'FailureKind',
    'NormalizedDocument',
    'NormalizationFailure',
    'normalize_ofx',
    'parse_ofx_date',
    'DocumentMapper',
    'map_document',
    # Entry points
    'OFXReader',
    'parse',
    'BaseParser',
    'OfxParser',
]
