from .objects import Metadata  # NOQA
from .providers import fetch_metadata, PROVIDERS  # NOQA

__version__ = '0.1.0'
