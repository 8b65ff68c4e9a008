from typing import Any, Iterator

import requests
from pydantic import ValidationError

from tastyharvest.exceptions import ConfigurationError
from tastyharvest.harvester.base import BaseHarvester

from .client import PageClient
from .config import SourceConfig
from .models import PagePlan, Record
from .planner import CountPlanner, UrlPlanner
from .stream import RecordStream
from .tracker import ChangeTracker


class PaginatedHarvester(BaseHarvester):
    """
    Harvests records from an offset-paginated listing endpoint.

    The first page decides the page size and the count, every page URL is
    planned up front and records are then fetched lazily, page by page.
    """

    def __init__(
        self,
        config: SourceConfig | dict[str, Any],
        client: PageClient | None = None,
        session: requests.Session | None = None,
    ):
        """
        Initialize the harvester.

        Args:
            config (SourceConfig | dict[str, Any]): Source config, ``url`` is required.
            client (PageClient | None): Page client, built from config if omitted.
            session (requests.Session | None): Session for the default client.

        Raises:
            ConfigurationError: If the config is missing ``url`` or is invalid.
        """
        super().__init__()
        if isinstance(config, dict) and "url" not in config:
            raise ConfigurationError('The "url" configuration missing.')
        try:
            self.config = SourceConfig.model_validate(config)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid source configuration: {e}") from e

        self.client = client or PageClient(timeout=self.config.timeout, session=session)
        self._plan: PagePlan | None = None
        self._urls: list[str] | None = None

    def __str__(self) -> str:
        return "OpenAhjo"

    def get_ids(self) -> dict[str, dict[str, str]]:
        return {"id": {"type": "string"}}

    def fields(self) -> dict[str, str]:
        return {}

    @property
    def plan(self) -> PagePlan:
        if self._plan is None:
            self._plan = CountPlanner(self.client).plan(self.config.url, self.config)
        return self._plan

    def count(self, refresh: bool = False) -> int:
        """Returns the number of records this run will attempt to produce."""
        if refresh:
            self._plan = None
            self._urls = None
        return self.plan.count

    def urls(self) -> list[str]:
        if self._urls is None:
            plan = self.plan
            self._urls = UrlPlanner().enumerate(self.config.url, plan.limit, plan.count)
            self.logger.debug("Planned URLs: %s", self._urls)
        return self._urls

    def records(self) -> RecordStream:
        """Starts a new run from the first page with a fresh change tracker."""
        return RecordStream(
            self.urls(),
            self.client,
            tracker=ChangeTracker(),
            partial_migrate=self.config.partial_migrate,
            item_limit=self.config.item_limit,
        )

    def __iter__(self) -> Iterator[Record]:
        return self.records()

    def return_items(self) -> list[Record]:
        items = list(self.records())
        self.logger.info(f"Finished fetching data, retrieved {len(items)} items")
        return items
