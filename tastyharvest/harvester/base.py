from abc import ABC, abstractmethod
from typing import Any

from tastyharvest.log import logger


class BaseHarvester(ABC):
    def __init__(self):
        """Initializes logger for all harvester classes."""
        self.logger = logger.getChild(self.__class__.__name__)

    @abstractmethod
    def return_items(self) -> list[dict[str, Any]]:
        pass
