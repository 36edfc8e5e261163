from .logging_config import get_logger, setup_logging, set_document_id, get_document_id, clear_document_id
from .models import (
    HeaderFields,
    Status,
    Institute,
    SignOn,
    AccountInfo,
    Transaction,
    Statement,
    BankAccount,
    ParsedDocument,
)

__all__ = [
    'get_logger',
    'setup_logging',
    'set_document_id',
    'get_document_id',
    'clear_document_id',
    'HeaderFields',
    'Status',
    'Institute',
    'SignOn',
    'AccountInfo',
    'Transaction',
    'Statement',
    'BankAccount',
    'ParsedDocument',
]
