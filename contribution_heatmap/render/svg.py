from pathlib import Path

import svgwrite

from contribution_heatmap.schemas.heatmap import HeatmapGrid


OUTPUT_FILENAME = "combined-graph.svg"
LEFT_PAD = 20
TOP_PAD = 12
CORNER_RADIUS = 3


class RenderError(Exception):
    """Raised when the heatmap image cannot be written."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


def canvas_size(weeks: int, cell_size: int, gap: int) -> tuple[int, int]:
    """Return `(width, height)` of the canvas for a grid of `weeks` columns."""

    step = cell_size + gap
    width = weeks * step + LEFT_PAD + 10
    height = 7 * step + TOP_PAD + 10
    return width, height


def cell_title(iso_date: str, count: int) -> str:
    """Return the tooltip text for one day-square."""

    suffix = "" if count == 1 else "s"
    return f"{iso_date}: {count} contribution{suffix}"


def build_drawing(
    grid: HeatmapGrid,
    cell_size: int,
    gap: int,
    filename: str = OUTPUT_FILENAME,
) -> svgwrite.Drawing:
    """Lay grid cells out column-major: one column per week, one row per weekday."""

    width, height = canvas_size(grid.weeks, cell_size, gap)
    step = cell_size + gap

    drawing = svgwrite.Drawing(
        filename,
        size=(width, height),
        viewBox=f"0 0 {width} {height}",
        debug=False,
    )
    drawing.add(drawing.rect(size=("100%", "100%"), fill="transparent"))

    for cell in grid.cells:
        rect = drawing.rect(
            insert=(LEFT_PAD + cell.week_index * step, TOP_PAD + cell.weekday * step),
            size=(cell_size, cell_size),
            rx=CORNER_RADIUS,
            ry=CORNER_RADIUS,
            fill=cell.fill,
        )
        rect.set_desc(title=cell_title(cell.iso_date, cell.count))
        drawing.add(rect)

    return drawing


def write_svg(drawing: svgwrite.Drawing, path: Path | str = OUTPUT_FILENAME) -> Path:
    """Write the drawing to `path`, replacing any existing file.

    Raises:
        RenderError: If the file cannot be written.
    """

    target = Path(path)
    try:
        drawing.saveas(str(target))
    except OSError as exc:
        raise RenderError(target, exc.strerror or str(exc)) from exc
    return target
