"""
XML tree parsing capability.

The pipeline only needs "markup in, element tree or diagnostics out"; the
TreeParser interface keeps the rest of the package independent of the XML
library doing the work.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple
import xml.etree.ElementTree as ET


@dataclass(frozen=True)
class TreeDiagnostic:
    """One structural error reported by a tree parser."""
    message: str
    line: Optional[int] = None
    column: Optional[int] = None
    code: Optional[int] = None

    def __str__(self):
        if self.line is None:
            return self.message
        return f"line {self.line}, column {self.column}: {self.message}"


@dataclass(frozen=True)
class TreeParseResult:
    root: Optional[ET.Element] = None
    diagnostics: Tuple[TreeDiagnostic, ...] = ()

    @property
    def ok(self) -> bool:
        return self.root is not None and not self.diagnostics


class TreeParser(ABC):
    """Turns well-formed markup text into an element tree."""

    @abstractmethod
    def parse(self, markup: str) -> TreeParseResult:
        """
        Parse markup.

        Returns:
            TreeParseResult with the root element, or with diagnostics when the
            markup is not well-formed. Must not raise for malformed input.
        """
        raise NotImplementedError


class ElementTreeParser(TreeParser):
    """TreeParser backed by xml.etree.ElementTree."""

    def parse(self, markup: str) -> TreeParseResult:
        try:
            root = ET.fromstring(markup)
        except ET.ParseError as e:
            line, column = e.position
            return TreeParseResult(diagnostics=(
                TreeDiagnostic(message=str(e), line=line, column=column, code=e.code),
            ))
        return TreeParseResult(root=root)
