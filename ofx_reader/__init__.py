"""
OFX reader for accounting imports and bank reconciliation.

    from ofx_reader import parse

    document = parse(open('extrato.ofx', 'rb').read())
    for account, transaction in document.transactions():
        ...
"""
from .common.models import (
    Status,
    Institute,
    SignOn,
    AccountInfo,
    Transaction,
    Statement,
    BankAccount,
    ParsedDocument,
)
from .parsing.exceptions import (
    OFXError,
    RootTagMissingError,
    EncodingConversionError,
    MalformedMarkupError,
    InvalidDateError,
)
from .parsing.config import ParserSettings, load_settings
from .parsing.reader import OFXReader, parse

__version__ = "0.1.0"

__all__ = [
    'parse',
    'OFXReader',
    'ParserSettings',
    'load_settings',
    'OFXError',
    'RootTagMissingError',
    'EncodingConversionError',
    'MalformedMarkupError',
    'InvalidDateError',
    'Status',
    'Institute',
    'SignOn',
    'AccountInfo',
    'Transaction',
    'Statement',
    'BankAccount',
    'ParsedDocument',
]
