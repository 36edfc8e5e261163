"""
Shared fixtures: sample OFX documents in both dialects.
"""
import pytest


SGML_HEADER = """OFXHEADER:100
DATA:OFXSGML
VERSION:102
SECURITY:NONE
ENCODING:USASCII
CHARSET:1252
COMPRESSION:NONE
OLDFILEUID:NONE
NEWFILEUID:NONE
"""

SGML_BODY = """<OFX>
<SIGNONMSGSRSV1>
<SONRS>
<STATUS>
<CODE>0
<SEVERITY>INFO
</STATUS>
<DTSERVER>20230131120000[-3:BRT]
<LANGUAGE>POR
<FI>
<ORG>Banco Exemplo
<FID>999
</FI>
</SONRS>
</SIGNONMSGSRSV1>
<BANKMSGSRSV1>
<STMTTRNRS>
<TRNUID>1001
<STATUS>
<CODE>0
<SEVERITY>INFO
</STATUS>
<STMTRS>
<CURDEF>BRL
<BANKACCTFROM>
<BANKID>0001
<BRANCHID>2936
<ACCTID>49132-2
<ACCTTYPE>CHECKING
</BANKACCTFROM>
<BANKTRANLIST>
<DTSTART>20230101000000[-3:BRT]
<DTEND>20230131000000[-3:BRT]
<STMTTRN>
<TRNTYPE>DEBIT
<DTPOSTED>20230105100000[-3:BRT]
<TRNAMT>-150.00
<FITID>20230105001
<CHECKNUM>001
<NAME>ARRUDA & BARROS LTDA
<MEMO>
</STMTTRN>
<STMTTRN>
<TRNTYPE>CREDIT
<DTPOSTED>20230110
<DTUSER>20230109
<TRNAMT>504.00
<FITID>20230110002
<NAME>PIX RECEBIDO
<MEMO>MILENY ARRUDA
</STMTTRN>
</BANKTRANLIST>
<LEDGERBAL>
<BALAMT>354.00
<DTASOF>20230131
</LEDGERBAL>
</STMTRS>
</STMTTRNRS>
</BANKMSGSRSV1>
</OFX>
"""

XML_CREDIT_CARD = """<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<?OFX OFXHEADER="200" VERSION="211" SECURITY="NONE" OLDFILEUID="NONE" NEWFILEUID="NONE"?>
<OFX>
  <SIGNONMSGSRSV1>
    <SONRS>
      <STATUS><CODE>0</CODE><SEVERITY>INFO</SEVERITY></STATUS>
      <DTSERVER>20230115120000.500[-5:EST]</DTSERVER>
      <LANGUAGE>ENG</LANGUAGE>
      <FI><ORG>Example Card</ORG><FID>4242</FID></FI>
    </SONRS>
  </SIGNONMSGSRSV1>
  <SIGNUPMSGSRSV1>
    <ACCTINFOTRNRS>
      <TRNUID>0</TRNUID>
      <ACCTINFO>
        <DESC>Visa Platinum</DESC>
        <ACCTID>4111222233334444</ACCTID>
      </ACCTINFO>
    </ACCTINFOTRNRS>
  </SIGNUPMSGSRSV1>
  <CREDITCARDMSGSRSV1>
    <CCSTMTTRNRS>
      <TRNUID>cc-77</TRNUID>
      <CCSTMTRS>
        <CURDEF>USD</CURDEF>
        <CCACCTFROM><ACCTID>4111222233334444</ACCTID></CCACCTFROM>
        <BANKTRANLIST>
          <DTSTART>20230101</DTSTART>
          <DTEND>20230115</DTEND>
          <STMTTRN>
            <TRNTYPE>PAYMENT</TRNTYPE>
            <DTPOSTED>20230103</DTPOSTED>
            <TRNAMT>-42.10</TRNAMT>
            <FITID>cc1</FITID>
            <NAME>COFFEE SHOP   </NAME>
            <MEMO>Latte  </MEMO>
            <SIC>5814</SIC>
          </STMTTRN>
        </BANKTRANLIST>
        <LEDGERBAL><BALAMT>-42.10</BALAMT><DTASOF>20230115</DTASOF></LEDGERBAL>
      </CCSTMTRS>
    </CCSTMTTRNRS>
  </CREDITCARDMSGSRSV1>
</OFX>
"""

XML_TWO_STATEMENTS = """<?xml version="1.0" encoding="UTF-8"?>
<?OFX OFXHEADER="200" VERSION="220" SECURITY="NONE" OLDFILEUID="NONE" NEWFILEUID="NONE"?>
<OFX>
  <SIGNONMSGSRSV1>
    <SONRS>
      <STATUS><CODE>0</CODE><SEVERITY>INFO</SEVERITY></STATUS>
      <DTSERVER>20230201080000</DTSERVER>
      <LANGUAGE>ENG</LANGUAGE>
    </SONRS>
  </SIGNONMSGSRSV1>
  <BANKMSGSRSV1>
    <STMTTRNRS>
      <TRNUID>shared-1</TRNUID>
      <STMTRS>
        <CURDEF>USD</CURDEF>
        <BANKACCTFROM><BANKID>111</BANKID><ACCTID>A-1</ACCTID><ACCTTYPE>CHECKING</ACCTTYPE></BANKACCTFROM>
        <BANKTRANLIST>
          <DTSTART>20230101</DTSTART>
          <DTEND>20230131</DTEND>
          <STMTTRN><TRNTYPE>DEBIT</TRNTYPE><DTPOSTED>20230102</DTPOSTED><TRNAMT>-1.00</TRNAMT><FITID>a1</FITID></STMTTRN>
          <STMTTRN><TRNTYPE>DEBIT</TRNTYPE><DTPOSTED>20230101</DTPOSTED><TRNAMT>-2.00</TRNAMT><FITID>a2</FITID></STMTTRN>
          <STMTTRN><TRNTYPE>CREDIT</TRNTYPE><DTPOSTED>20230103</DTPOSTED><TRNAMT>3.00</TRNAMT><FITID>a3</FITID></STMTTRN>
        </BANKTRANLIST>
        <LEDGERBAL><BALAMT>100.00</BALAMT><DTASOF>20230131</DTASOF></LEDGERBAL>
      </STMTRS>
      <STMTRS>
        <CURDEF>USD</CURDEF>
        <BANKACCTFROM><BANKID>111</BANKID><ACCTID>B-2</ACCTID><ACCTTYPE>SAVINGS</ACCTTYPE></BANKACCTFROM>
        <BANKTRANLIST>
          <DTSTART>20230101</DTSTART>
          <DTEND>20230131</DTEND>
          <STMTTRN><TRNTYPE>INT</TRNTYPE><DTPOSTED>20230131</DTPOSTED><TRNAMT>0.42</TRNAMT><FITID>b1</FITID></STMTTRN>
        </BANKTRANLIST>
        <LEDGERBAL><BALAMT>2500.42</BALAMT><DTASOF>20230131</DTASOF></LEDGERBAL>
      </STMTRS>
    </STMTTRNRS>
  </BANKMSGSRSV1>
</OFX>
"""


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def sgml_document():
    """OFX 1.02 checking statement, CRLF line endings like real bank exports."""
    text = SGML_HEADER + "\n" + SGML_BODY
    return text.replace("\n", "\r\n").encode("ascii")


@pytest.fixture
def sgml_body():
    return SGML_BODY


@pytest.fixture
def xml_credit_card_document():
    """OFX 2.11 credit card statement."""
    return XML_CREDIT_CARD.encode("utf-8")


@pytest.fixture
def xml_two_statements_document():
    """One STMTTRNRS wrapper holding two STMTRS."""
    return XML_TWO_STATEMENTS.encode("utf-8")


@pytest.fixture
def make_sgml_document():
    """Build an SGML document whose first transaction has the given NAME."""
    def _make(name: str, encoding: str, charset: str = "1252") -> bytes:
        header = SGML_HEADER.replace("CHARSET:1252", f"CHARSET:{charset}")
        body = SGML_BODY.replace("PIX RECEBIDO", name)
        return (header + "\n" + body).encode(encoding)
    return _make
