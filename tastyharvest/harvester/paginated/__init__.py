from .client import PageClient
from .config import SourceConfig
from .harvester import PaginatedHarvester
from .models import PageMetadata, PagePlan, Record
from .planner import CountPlanner, UrlPlanner
from .stream import RecordStream
from .tracker import NUM_IGNORED_ROWS_BEFORE_STOPPING, ChangeTracker

__all__ = [
    "PaginatedHarvester",
    "SourceConfig",
    "PageClient",
    "CountPlanner",
    "UrlPlanner",
    "RecordStream",
    "ChangeTracker",
    "NUM_IGNORED_ROWS_BEFORE_STOPPING",
    "PageMetadata",
    "PagePlan",
    "Record",
]
