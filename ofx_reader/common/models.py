"""
Domain model for parsed OFX documents.

Every entity is frozen and sequences are tuples: a ParsedDocument cannot be
changed once the mapping pass has built it.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterator, Optional, Tuple

# Header key/value pairs as written before the <OFX> root tag.
HeaderFields = Dict[str, str]


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class Status:
    code: str
    severity: str
    message: str

    def to_dict(self):
        return {'code': self.code, 'severity': self.severity, 'message': self.message}


@dataclass(frozen=True)
class Institute:
    id: str
    name: str

    def to_dict(self):
        return {'id': self.id, 'name': self.name}


@dataclass(frozen=True)
class SignOn:
    """Sign-on response (SONRS) of the document."""
    status: Status
    server_timestamp: datetime
    language: str
    institute: Institute

    def to_dict(self):
        return {
            'status': self.status.to_dict(),
            'server_timestamp': _iso(self.server_timestamp),
            'language': self.language,
            'institute': self.institute.to_dict(),
        }


@dataclass(frozen=True)
class AccountInfo:
    description: str
    account_id: str

    def to_dict(self):
        return {'description': self.description, 'account_id': self.account_id}


@dataclass(frozen=True)
class Transaction:
    """
    A single STMTTRN entry.

    Attributes:
        kind: TRNTYPE (DEBIT, CREDIT, PAYMENT, ...)
        amount: Signed amount; negative values leave the account
        posted_date: DTPOSTED
        user_date: DTUSER, None when the document omits it
        unique_id: FITID, the institution's transaction id
        standard_industry_code: SIC
    """
    kind: str
    amount: Decimal
    posted_date: datetime
    user_date: Optional[datetime]
    unique_id: str
    name: str
    memo: str
    standard_industry_code: str
    check_number: str

    def to_dict(self):
        return {
            'kind': self.kind,
            'amount': self.amount,
            'posted_date': _iso(self.posted_date),
            'user_date': _iso(self.user_date),
            'unique_id': self.unique_id,
            'name': self.name,
            'memo': self.memo,
            'standard_industry_code': self.standard_industry_code,
            'check_number': self.check_number,
        }


@dataclass(frozen=True)
class Statement:
    currency: str
    transactions: Tuple[Transaction, ...]
    start_date: datetime
    end_date: datetime

    def to_dict(self):
        return {
            'currency': self.currency,
            'transactions': [t.to_dict() for t in self.transactions],
            'start_date': _iso(self.start_date),
            'end_date': _iso(self.end_date),
        }


@dataclass(frozen=True)
class BankAccount:
    """
    Checking, savings or credit-card account with its statement.

    group_id is the TRNUID of the response wrapper the account was reported in;
    accounts sharing a wrapper share the id.
    """
    account_number: str
    account_type: str
    agency_number: str
    routing_number: str
    balance: Decimal
    balance_date: datetime
    group_id: str
    statement: Statement

    def to_dict(self):
        return {
            'account_number': self.account_number,
            'account_type': self.account_type,
            'agency_number': self.agency_number,
            'routing_number': self.routing_number,
            'balance': self.balance,
            'balance_date': _iso(self.balance_date),
            'group_id': self.group_id,
            'statement': self.statement.to_dict(),
        }


@dataclass(frozen=True)
class ParsedDocument:
    """
    Top-level parse result.

    account_info is None when the document has no account-info section and an
    empty tuple when the section is present without entries.
    """
    sign_on: SignOn
    account_info: Optional[Tuple[AccountInfo, ...]]
    bank_accounts: Tuple[BankAccount, ...]

    def transactions(self) -> Iterator[Tuple[BankAccount, Transaction]]:
        """Yield (account, transaction) pairs across all accounts in document order."""
        for account in self.bank_accounts:
            for transaction in account.statement.transactions:
                yield account, transaction

    def to_dict(self):
        return {
            'sign_on': self.sign_on.to_dict(),
            'account_info': (
                [a.to_dict() for a in self.account_info]
                if self.account_info is not None else None
            ),
            'bank_accounts': [a.to_dict() for a in self.bank_accounts],
        }
