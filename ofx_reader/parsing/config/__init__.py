# Configuration submodule
from .settings import ParserSettings, DEFAULT_SETTINGS
from .loader import load_settings

__all__ = ['ParserSettings', 'DEFAULT_SETTINGS', 'load_settings']
