"""
Domain Mapper

Walks a normalized <OFX> element tree and builds the ParsedDocument.

Leaf values are read leniently: a missing element gives "" (or 0 for
amounts). Required dates are the exception and raise InvalidDateError with
the element path.
"""
import re
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple
import xml.etree.ElementTree as ET
from ofx_reader.common.logging_config import get_logger
from ofx_reader.common.models import (
    AccountInfo,
    BankAccount,
    Institute,
    ParsedDocument,
    SignOn,
    Statement,
    Status,
    Transaction,
)
from .config.settings import ParserSettings, DEFAULT_SETTINGS
from .dates import parse_ofx_date

logger = get_logger(__name__)

_EMPTY = ET.Element('EMPTY')
_COMMA_DECIMAL_RE = re.compile(r'^[+-]?\d+,\d+$')


def _text(node: Optional[ET.Element], path: str) -> str:
    if node is None:
        return ''
    return node.findtext(path, default='') or ''


def _child(node: Optional[ET.Element], path: str) -> ET.Element:
    found = node.find(path) if node is not None else None
    return found if found is not None else _EMPTY


def parse_amount(raw: str, field: str = None) -> Decimal:
    """
    Parse an OFX amount. Never raises.

    "-12.50" and "-12,50" both give Decimal("-12.50"); empty, unreadable
    or non-finite (NaN, Infinity) values give Decimal("0").
    """
    text = (raw or '').strip()
    if not text:
        return Decimal('0')

    if _COMMA_DECIMAL_RE.match(text):
        text = text.replace(',', '.')

    try:
        value = Decimal(text)
    except InvalidOperation:
        logger.warning(f"Unreadable amount {raw!r}, using 0", field=field)
        return Decimal('0')

    # NaN, sNaN and Infinity are valid Decimal literals but not amounts
    if not value.is_finite():
        logger.warning(f"Non-finite amount {raw!r}, using 0", field=field)
        return Decimal('0')
    return value


class DocumentMapper:
    """
    Maps an <OFX> element into the domain model.

    Paths follow the OFX response layout:
    - SIGNONMSGSRSV1/SONRS            -> SignOn
    - SIGNUPMSGSRSV1/ACCTINFOTRNRS    -> AccountInfo (optional)
    - BANKMSGSRSV1/STMTTRNRS/STMTRS   -> BankAccount
    - CREDITCARDMSGSRSV1/CCSTMTTRNRS  -> BankAccount (credit card)
    """

    def __init__(self, settings: ParserSettings = DEFAULT_SETTINGS):
        self.settings = settings

    def map(self, root: ET.Element) -> ParsedDocument:
        sign_on = self.parse_sign_on(_child(root, 'SIGNONMSGSRSV1/SONRS'), 'SIGNONMSGSRSV1/SONRS')
        account_info = self.parse_account_info(root.find('SIGNUPMSGSRSV1/ACCTINFOTRNRS'))

        bank_accounts: List[BankAccount] = []
        bank_accounts.extend(self.parse_bank_accounts(root))
        bank_accounts.extend(self.parse_credit_accounts(root))

        document = ParsedDocument(
            sign_on=sign_on,
            account_info=account_info,
            bank_accounts=tuple(bank_accounts),
        )
        logger.info(
            "OFX document mapped",
            accounts=len(document.bank_accounts),
            transactions=sum(len(a.statement.transactions) for a in document.bank_accounts),
        )
        return document

    # ------------------------------------------------------------------
    # Sign-on
    # ------------------------------------------------------------------

    def parse_sign_on(self, node: ET.Element, location: str) -> SignOn:
        status = self.parse_status(_child(node, 'STATUS'))
        server_timestamp = self._date(node, 'DTSERVER', location)
        language = _text(node, 'LANGUAGE')
        institute = self.parse_institute(_child(node, 'FI'))
        return SignOn(status, server_timestamp, language, institute)

    def parse_status(self, node: ET.Element) -> Status:
        return Status(
            code=_text(node, 'CODE'),
            severity=_text(node, 'SEVERITY'),
            message=_text(node, 'MESSAGE'),
        )

    def parse_institute(self, node: ET.Element) -> Institute:
        return Institute(id=_text(node, 'FID'), name=_text(node, 'ORG'))

    # ------------------------------------------------------------------
    # Account info
    # ------------------------------------------------------------------

    def parse_account_info(self, node: Optional[ET.Element]) -> Optional[Tuple[AccountInfo, ...]]:
        if node is None:
            return None

        accounts = []
        for entry in node.findall('ACCTINFO'):
            account_id = _text(entry, 'ACCTID') or _text(entry, './/ACCTID')
            accounts.append(AccountInfo(description=_text(entry, 'DESC'), account_id=account_id))
        return tuple(accounts)

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def parse_bank_accounts(self, root: ET.Element) -> List[BankAccount]:
        accounts = []
        for i, wrapper in enumerate(root.findall('BANKMSGSRSV1/STMTTRNRS'), start=1):
            group_id = _text(wrapper, 'TRNUID')
            for j, stmt in enumerate(wrapper.findall('STMTRS'), start=1):
                location = f"BANKMSGSRSV1/STMTTRNRS[{i}]/STMTRS[{j}]"
                accounts.append(self.parse_account(group_id, stmt, _child(stmt, 'BANKACCTFROM'), location))
        return accounts

    def parse_credit_accounts(self, root: ET.Element) -> List[BankAccount]:
        accounts = []
        for i, wrapper in enumerate(root.findall('CREDITCARDMSGSRSV1/CCSTMTTRNRS'), start=1):
            group_id = _text(wrapper, 'TRNUID')
            location = f"CREDITCARDMSGSRSV1/CCSTMTTRNRS[{i}]"

            stmt = wrapper.find('CCSTMTRS')
            if stmt is None:
                stmt = wrapper
            else:
                location = f"{location}/CCSTMTRS"

            acct_node = stmt.find('CCACCTFROM')
            if acct_node is None:
                acct_node = _child(stmt, 'BANKACCTFROM')

            accounts.append(self.parse_account(group_id, stmt, acct_node, location))
        return accounts

    def parse_account(self, group_id: str, stmt: ET.Element, acct_node: ET.Element, location: str) -> BankAccount:
        """Build a BankAccount from a statement root and its account-identifying node."""
        ledger = _child(stmt, 'LEDGERBAL')
        return BankAccount(
            account_number=_text(acct_node, 'ACCTID'),
            account_type=_text(acct_node, 'ACCTTYPE'),
            agency_number=_text(acct_node, 'BRANCHID'),
            routing_number=_text(acct_node, 'BANKID'),
            balance=parse_amount(_text(ledger, 'BALAMT'), f"{location}/LEDGERBAL/BALAMT"),
            balance_date=self._date(ledger, 'DTASOF', f"{location}/LEDGERBAL"),
            group_id=group_id,
            statement=self.parse_statement(stmt, location),
        )

    # ------------------------------------------------------------------
    # Statement
    # ------------------------------------------------------------------

    def parse_statement(self, stmt: ET.Element, location: str) -> Statement:
        tranlist = _child(stmt, 'BANKTRANLIST')
        tranlist_location = f"{location}/BANKTRANLIST"

        transactions = [
            self.parse_transaction(t, f"{tranlist_location}/STMTTRN[{k}]")
            for k, t in enumerate(tranlist.findall('STMTTRN'), start=1)
        ]

        return Statement(
            currency=_text(stmt, 'CURDEF'),
            transactions=tuple(transactions),
            start_date=self._date(tranlist, 'DTSTART', tranlist_location),
            end_date=self._date(tranlist, 'DTEND', tranlist_location),
        )

    def parse_transaction(self, node: ET.Element, location: str) -> Transaction:
        user_date = None
        if _text(node, 'DTUSER') != '':
            user_date = self._date(node, 'DTUSER', location)

        return Transaction(
            kind=_text(node, 'TRNTYPE'),
            amount=parse_amount(_text(node, 'TRNAMT'), f"{location}/TRNAMT"),
            posted_date=self._date(node, 'DTPOSTED', location),
            user_date=user_date,
            unique_id=_text(node, 'FITID'),
            name=_text(node, 'NAME').rstrip(),
            memo=_text(node, 'MEMO').rstrip(),
            standard_industry_code=_text(node, 'SIC'),
            check_number=_text(node, 'CHECKNUM'),
        )

    def _date(self, node: ET.Element, tag: str, location: str):
        return parse_ofx_date(_text(node, tag), field=f"{location}/{tag}", settings=self.settings)


def map_document(root: ET.Element, settings: ParserSettings = DEFAULT_SETTINGS) -> ParsedDocument:
    """Map a normalized <OFX> element into a ParsedDocument."""
    return DocumentMapper(settings).map(root)
