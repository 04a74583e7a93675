"""Application layer for cardpack.

Services here orchestrate business logic and depend only on port
interfaces; concrete adapters are wired in ``cardpack.bootstrap``.
"""

from cardpack.app.collector import FileCollector
from cardpack.app.packer_service import CardPackerService
from cardpack.app.validation_service import CardValidator

__all__ = [
    "CardPackerService",
    "CardValidator",
    "FileCollector",
]
