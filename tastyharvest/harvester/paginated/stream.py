from typing import Any, Iterator, Sequence

from tastyharvest.log import logger

from .client import PageClient
from .models import Record
from .tracker import ChangeTracker

EXHAUSTED = "exhausted"
ITEM_LIMIT = "item_limit"
UNCHANGED_LIMIT = "unchanged_limit"


class RecordStream(Iterator[Record]):
    """
    Lazy, forward-only iterator over the records of planned pages.

    Pages are fetched one at a time when the buffered page runs out. Two
    guards can end the stream early: the item limit, and in partial mode the
    unchanged-record threshold of the ChangeTracker. The host reports its
    verdict on each consumed record through ``report``.
    """

    def __init__(
        self,
        urls: Sequence[str],
        client: PageClient,
        tracker: ChangeTracker | None = None,
        partial_migrate: bool = False,
        item_limit: int = 0,
    ):
        self.urls = list(urls)
        self.client = client
        self.tracker = tracker if tracker is not None else ChangeTracker()
        self.partial_migrate = partial_migrate
        self.item_limit = item_limit
        self.logger = logger.getChild(self.__class__.__name__)

        self._page_index = 0
        self._objects: list[Any] = []
        self._position = 0
        self.processed = 0
        self.fetched_pages = 0
        self.empty_pages = 0
        self.stop_reason: str | None = None

    def __iter__(self) -> "RecordStream":
        return self

    def __next__(self) -> Record:
        if self.stop_reason is not None:
            raise StopIteration

        while self._position >= len(self._objects):
            if self._page_index >= len(self.urls):
                self._stop(EXHAUSTED)
            # Guards run before a fetch so no page is requested after a stop
            self._check_guards()
            self._load_page(self.urls[self._page_index])
            self._page_index += 1

        self._check_guards()
        record = self._objects[self._position]
        self._position += 1
        self.processed += 1
        return record

    def report(self, changed: bool) -> None:
        """Records whether the last consumed record differed from stored state."""
        self.tracker.record_outcome(changed)

    def _check_guards(self) -> None:
        if self.tracker.should_stop(self.partial_migrate):
            self._stop(UNCHANGED_LIMIT)
        if self.item_limit > 0 and self.processed + 1 > self.item_limit:
            self._stop(ITEM_LIMIT)

    def _load_page(self, url: str) -> None:
        self.logger.info(f"Fetching page {self._page_index + 1}/{len(self.urls)}")
        content = self.client.fetch(url)
        self.fetched_pages += 1

        objects = content.get("objects", [])
        if not isinstance(objects, list):
            self.logger.warning(f"No 'objects' list in {url}, skipping page")
            objects = []

        if not objects:
            self.empty_pages += 1

        self._objects = objects
        self._position = 0

    def _stop(self, reason: str) -> None:
        self.stop_reason = reason
        self._objects = []
        self._position = 0
        self.logger.info(
            "Stream ended (%s) after %s records from %s pages",
            reason,
            self.processed,
            self.fetched_pages,
        )
        raise StopIteration
