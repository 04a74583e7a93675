"""cardpack - pack, unpack, and validate card archives.

Converts a card project directory into a single zero-compression card
archive and back, with structural validation and integrity checksums.
"""

__version__ = "0.1.0"
__author__ = "cardpack Contributors"

from cardpack.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
