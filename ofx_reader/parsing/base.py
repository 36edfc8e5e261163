"""
Base Classes for Source Parsers

Source parsers feed the reconciliation workflow: they return a DataFrame of
transactions plus a metadata dict, and expose extract() for pipelines that
expect a plain dict.
"""
from abc import ABC, abstractmethod
from typing import Union
from ofx_reader.common.logging_config import get_logger
import pandas as pd

logger = get_logger(__name__)

TRANSACTION_COLUMNS = ['date', 'amount', 'description', 'source']


class BaseParser(ABC):
    """
    Abstract Base Class for source parsers.

    Returns:
        Tuple[DataFrame, Dict]: (transactions_df, metadata)
    """

    def read_content(self, file_path_or_buffer) -> Union[bytes, str]:
        """
        Read raw content from a path, bytes, or a file-like object.

        Binary buffers give bytes; text buffers give str.
        """
        if isinstance(file_path_or_buffer, (bytes, bytearray)):
            return bytes(file_path_or_buffer)
        if isinstance(file_path_or_buffer, str):
            with open(file_path_or_buffer, 'rb') as f:
                return f.read()
        return file_path_or_buffer.read()

    @abstractmethod
    def parse(self, file_path_or_buffer) -> tuple[pd.DataFrame, dict]:
        """
        Parses the source and returns a DataFrame of transactions and a metadata dict.
        Must be implemented by subclasses.
        """
        raise NotImplementedError

    def extract(self, file_path: str) -> dict:
        """
        Adapter for dict-based pipelines.
        Converts the (df, metadata) output of parse() into the pipeline format.
        """
        try:
            df, metadata = self.parse(file_path)

            transactions = []
            if not df.empty:
                if 'description' in df.columns and 'memo' not in df.columns:
                    df['memo'] = df['description']
                transactions = df.to_dict(orient='records')

            return {
                'transactions': transactions,
                'account_info': metadata,
                'balance_info': {
                    'start': metadata.get('balance_start'),
                    'end': metadata.get('balance_end')
                },
                'validation': {'is_valid': True, 'msg': f'Parsed via {self.__class__.__name__}'},
            }
        except Exception as e:
            logger.error(f"Adapter extraction failed: {e}", exc_info=True)
            return {
                'transactions': [],
                'account_info': {},
                'error': str(e),
                'validation': {'is_valid': False, 'msg': str(e)}
            }
