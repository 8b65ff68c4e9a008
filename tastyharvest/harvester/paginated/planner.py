from urllib.parse import unquote_plus, urlsplit, urlunsplit

from pydantic import ValidationError

from tastyharvest.exceptions import ConfigurationError
from tastyharvest.log import logger

from .client import PageClient
from .config import SourceConfig
from .models import PageMetadata, PagePlan

META_KEYS = ("limit", "offset", "total_count")
OFFSET_PARAM = "offset"


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


class CountPlanner:
    """Derives page size and effective record count from the first page."""

    def __init__(self, client: PageClient):
        self.client = client
        self.logger = logger.getChild(self.__class__.__name__)

    def plan(self, base_url: str, config: SourceConfig) -> PagePlan:
        """
        Fetches the base URL once and plans the run.

        Args:
            base_url (str): The listing endpoint.
            config (SourceConfig): Source config, only ``limit_pages`` is used.

        Returns:
            PagePlan: Page size, effective count and number of pages.

        Raises:
            ConfigurationError: If the metadata envelope is missing or unusable.
        """
        body = self.client.fetch(base_url)
        meta = body.get("meta")
        if not isinstance(meta, dict):
            meta = {}

        for key in META_KEYS:
            if meta.get(key) is None:
                self.logger.error(f"Listing at {base_url} has no meta.{key}")
                raise ConfigurationError(f'The "{key}" value is missing from meta[].')

        try:
            metadata = PageMetadata.model_validate(meta)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid meta[] in {base_url}: {e}") from e

        if metadata.limit <= 0:
            raise ConfigurationError(
                f'The "limit" value must be positive, got {metadata.limit}.'
            )

        pages = _ceil_div(metadata.total_count, metadata.limit)
        # Deliberate truncation for bounded test/staging runs
        if config.limit_pages is not None:
            pages = min(pages, config.limit_pages)
        pages = max(pages, 0)

        plan = PagePlan(
            limit=metadata.limit,
            count=pages * metadata.limit,
            total_count=metadata.total_count,
            pages=pages,
        )
        self.logger.info(
            "Planned %s pages of %s records (%s available upstream)",
            plan.pages,
            plan.limit,
            plan.total_count,
        )
        return plan


class UrlPlanner:
    """Enumerates page URLs by rewriting the ``offset`` query parameter."""

    def enumerate(self, base_url: str, limit: int, count: int) -> list[str]:
        """
        Builds one URL per page in fetch order.

        Everything but the ``offset`` segment of the query string is kept
        verbatim. A missing ``offset`` is appended.

        Args:
            base_url (str): The listing endpoint.
            limit (int): Page size.
            count (int): Effective number of records.

        Returns:
            list[str]: Page URLs with offsets 0, limit, 2 * limit, ...
        """
        if limit <= 0:
            raise ConfigurationError(
                f'The "limit" value must be positive, got {limit}.'
            )

        parts = urlsplit(base_url)
        segments = parts.query.split("&") if parts.query else []

        urls = []
        for page in range(_ceil_div(count, limit)):
            query = _with_offset(segments, limit * page)
            urls.append(urlunsplit(parts._replace(query=query)))
        return urls


def _with_offset(segments: list[str], offset: int) -> str:
    replacement = f"{OFFSET_PARAM}={offset}"
    result = []
    replaced = False
    for segment in segments:
        if unquote_plus(segment.split("=", 1)[0]) == OFFSET_PARAM:
            if not replaced:
                result.append(replacement)
                replaced = True
            continue
        result.append(segment)
    if not replaced:
        result.append(replacement)
    return "&".join(result)
