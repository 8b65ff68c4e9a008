from .components import IncrementalHarvester
from .exceptions import ConfigurationError, HarvesterError, TastyHarvestError
from .harvester import PaginatedHarvester, SourceConfig
from .models import HarvestResult, Operation, OperationType

__version__ = "0.1.0"

__all__ = [
    "PaginatedHarvester",
    "IncrementalHarvester",
    "SourceConfig",
    "HarvestResult",
    "Operation",
    "OperationType",
    "TastyHarvestError",
    "ConfigurationError",
    "HarvesterError",
]
