from datetime import date

from pydantic import BaseModel
from pydantic import Field


class ContributionDay(BaseModel):
    """Daily contribution count reported for one account."""

    date: date
    count: int = Field(ge=0)


class AccountResult(BaseModel):
    """Outcome of fetching one account: its days, or the failure message."""

    account: str
    days: list[ContributionDay] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the account was fetched without error."""

        return self.error is None


class HeatmapCell(BaseModel):
    """Single day-square of the rendered grid."""

    date: date
    iso_date: str
    count: int
    week_index: int
    weekday: int
    level: int
    fill: str


class HeatmapGrid(BaseModel):
    """Whole-week grid covering the aggregation window."""

    start: date
    end: date
    from_day: date
    to_day: date
    max_count: int
    total: int
    cells: list[HeatmapCell]

    @property
    def weeks(self) -> int:
        """Number of week columns in the grid."""

        return len(self.cells) // 7
