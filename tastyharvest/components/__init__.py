from .harvester import IncrementalHarvester

__all__ = ["IncrementalHarvester"]
