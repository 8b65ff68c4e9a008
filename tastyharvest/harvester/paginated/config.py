import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PARTIAL_MIGRATE_ENV = "PARTIAL_MIGRATE"
ITEM_LIMIT_ENV = "MIGRATE_LIMIT"


class SourceConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = Field(description="Base listing endpoint of the paginated API")
    limit_pages: int | None = Field(
        default=None, ge=0, description="Maximum number of pages to fetch"
    )
    partial_migrate: bool = Field(
        default=False,
        description="Stop after a run of unchanged records (newest-first APIs)",
    )
    item_limit: int = Field(
        default=0, description="Maximum number of records to yield, 0 for no limit"
    )
    timeout: int = Field(default=60, description="Request timeout in seconds")

    @classmethod
    def from_env(cls, data: dict[str, Any]) -> "SourceConfig":
        """
        Builds a config, filling host switches from the environment.

        ``PARTIAL_MIGRATE=1`` enables partial migration and ``MIGRATE_LIMIT``
        sets the item limit. Values present in ``data`` take precedence.
        """
        values = dict(data)
        if "partial_migrate" not in values:
            values["partial_migrate"] = _env_int(PARTIAL_MIGRATE_ENV) == 1
        if "item_limit" not in values:
            values["item_limit"] = _env_int(ITEM_LIMIT_ENV)
        return cls.model_validate(values)


def _env_int(name: str) -> int:
    try:
        return int(os.environ.get(name, "0"))
    except ValueError:
        return 0
