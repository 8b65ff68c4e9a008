from .base import BaseHarvester
from .paginated import (
    PaginatedHarvester,
    SourceConfig,
)

__all__ = [
    "BaseHarvester",
    "PaginatedHarvester",
    "SourceConfig",
]
