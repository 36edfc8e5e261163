# Source parsers
from .ofx import OfxParser

__all__ = ['OfxParser']
