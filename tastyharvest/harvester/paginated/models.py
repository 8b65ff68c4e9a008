from typing import Any

from pydantic import BaseModel, Field, StrictInt

Record = dict[str, Any]


class PageMetadata(BaseModel):
    """The ``meta`` envelope of a listing response."""

    limit: StrictInt
    offset: StrictInt
    total_count: StrictInt


class PagePlan(BaseModel):
    limit: int = Field(description="Number of records per page")
    count: int = Field(description="Number of records the run will attempt")
    total_count: int = Field(description="Number of records reported upstream")
    pages: int = Field(description="Number of pages to fetch")
