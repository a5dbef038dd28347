from collections.abc import Mapping
from datetime import date
from datetime import timedelta

from contribution_heatmap.schemas.heatmap import HeatmapCell
from contribution_heatmap.schemas.heatmap import HeatmapGrid


LEVEL_COLORS = ("#ebedf0", "#9be9a8", "#40c463", "#30a14e", "#216e39")


def sunday_weekday(day: date) -> int:
    """Return the weekday index of a date with Sunday as 0."""

    return (day.weekday() + 1) % 7


def grid_bounds(from_day: date, to_day: date) -> tuple[date, date]:
    """Extend a window to the Sunday before `from_day` and Saturday after `to_day`."""

    start = from_day - timedelta(days=sunday_weekday(from_day))
    end = to_day + timedelta(days=6 - sunday_weekday(to_day))
    return start, end


def contribution_level(count: int, max_count: int, levels: int = len(LEVEL_COLORS)) -> int:
    """Map a daily count to a heatmap level relative to the grid maximum.

    Level is `ceil(count / max_count * (levels - 1))` clamped to
    `[1, levels - 1]`; zero counts and an all-zero grid stay at level 0.
    """

    if count <= 0 or max_count <= 0:
        return 0
    top = levels - 1
    level = -(-count * top // max_count)
    return max(1, min(level, top))


def build_grid(
    counts: Mapping[date, int],
    from_day: date,
    to_day: date,
) -> HeatmapGrid:
    """Lay aggregated counts out as whole Sunday-to-Saturday weeks."""

    start, end = grid_bounds(from_day, to_day)
    total_days = (end - start).days + 1

    dates = [start + timedelta(days=offset) for offset in range(total_days)]
    day_counts = [counts.get(day, 0) for day in dates]
    max_count = max(day_counts, default=0)

    cells: list[HeatmapCell] = []
    for index, (day, count) in enumerate(zip(dates, day_counts)):
        level = contribution_level(count, max_count)
        cells.append(
            HeatmapCell(
                date=day,
                iso_date=day.isoformat(),
                count=count,
                week_index=index // 7,
                weekday=index % 7,
                level=level,
                fill=LEVEL_COLORS[level],
            )
        )

    return HeatmapGrid(
        start=start,
        end=end,
        from_day=from_day,
        to_day=to_day,
        max_count=max_count,
        total=sum(day_counts),
        cells=cells,
    )
