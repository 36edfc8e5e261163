"""
OFX File Parser

Parses OFX (Open Financial Exchange) files for bank reconciliation.
"""
import pandas as pd
from ofx_reader.common.logging_config import get_logger, set_document_id, clear_document_id
from ..base import BaseParser, TRANSACTION_COLUMNS
from ..exceptions import OFXError
from ..reader import OFXReader

logger = get_logger(__name__)

OFX_COLUMNS = TRANSACTION_COLUMNS + ['fitid', 'type', 'account']


class OfxParser(BaseParser):
    """
    Parser for OFX bank and credit card statement files.

    Handles both SGML (v1) and XML (v2) files, including the encoding
    mislabels common in Brazilian bank exports.
    """

    def __init__(self, reader: OFXReader = None):
        self.reader = reader or OFXReader()

    def parse(self, file_path_or_buffer) -> tuple[pd.DataFrame, dict]:
        # Log records of a file read carry its path as document_id
        from_path = isinstance(file_path_or_buffer, str)
        if from_path:
            set_document_id(file_path_or_buffer)
        try:
            return self._parse(file_path_or_buffer)
        finally:
            if from_path:
                clear_document_id()

    def _parse(self, file_path_or_buffer) -> tuple[pd.DataFrame, dict]:
        transactions = []
        metadata = {
            'bank': '',
            'bank_id': '',
            'agency': '',
            'account': '',
            'start_date': None,
            'end_date': None,
            'balance_end': None,
        }

        try:
            raw = self.read_content(file_path_or_buffer)
            document = self.reader.read(raw)
        except (OFXError, OSError) as e:
            logger.error(f"Error parsing OFX: {e}", error_type=type(e).__name__)
            return pd.DataFrame(columns=OFX_COLUMNS), metadata

        if document is None:
            logger.warning("Input is not an OFX document")
            return pd.DataFrame(columns=OFX_COLUMNS), metadata

        metadata['bank'] = document.sign_on.institute.name
        if document.bank_accounts:
            account = document.bank_accounts[0]
            metadata['bank_id'] = account.routing_number
            metadata['agency'] = account.agency_number
            metadata['account'] = account.account_number
            metadata['balance_end'] = float(account.balance)

        for account, t in document.transactions():
            transactions.append({
                'date': t.posted_date.date(),
                'amount': float(t.amount),
                'description': t.memo or t.name,
                'source': 'Bank',
                'fitid': t.unique_id,
                'type': t.kind,
                'account': account.account_number,
            })

        df = pd.DataFrame(transactions, columns=OFX_COLUMNS)

        if not df.empty:
            metadata['start_date'] = df['date'].min()
            metadata['end_date'] = df['date'].max()

        logger.info("OFX parsed", tx_count=len(df), accounts=len(document.bank_accounts))
        return df, metadata
