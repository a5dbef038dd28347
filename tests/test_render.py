import xml.etree.ElementTree as ET
from datetime import date

import pytest

from contribution_heatmap.render.svg import RenderError
from contribution_heatmap.render.svg import build_drawing
from contribution_heatmap.render.svg import canvas_size
from contribution_heatmap.render.svg import cell_title
from contribution_heatmap.render.svg import write_svg
from contribution_heatmap.services.heatmap_service import build_grid


SVG = "{http://www.w3.org/2000/svg}"


def render_one_week(cell_size: int = 10, gap: int = 2) -> ET.Element:
    grid = build_grid(
        {date(2024, 1, 1): 5, date(2024, 1, 2): 1},
        date(2024, 1, 1),
        date(2024, 1, 3),
    )
    drawing = build_drawing(grid, cell_size=cell_size, gap=gap)
    return ET.fromstring(drawing.tostring())


def test_canvas_size_single_week() -> None:
    assert canvas_size(weeks=1, cell_size=10, gap=2) == (42, 106)


def test_canvas_size_default_year() -> None:
    assert canvas_size(weeks=53, cell_size=12, gap=3) == (825, 127)


def test_build_drawing_sizes_root_element() -> None:
    root = render_one_week()

    assert root.tag == f"{SVG}svg"
    assert root.get("width") == "42"
    assert root.get("height") == "106"
    assert root.get("viewBox") == "0 0 42 106"


def test_build_drawing_places_cells_column_major() -> None:
    root = render_one_week()
    rects = root.findall(f"{SVG}rect")[1:]

    assert len(rects) == 7
    for weekday, rect in enumerate(rects):
        assert rect.get("x") == "20"
        assert rect.get("y") == str(12 + weekday * 12)
        assert rect.get("width") == "10"
        assert rect.get("height") == "10"
        assert rect.get("rx") == "3"
        assert rect.get("ry") == "3"


def test_build_drawing_fills_and_titles_cells() -> None:
    root = render_one_week()
    rects = root.findall(f"{SVG}rect")[1:]

    fills = [rect.get("fill") for rect in rects]
    titles = [rect.find(f"{SVG}title").text for rect in rects]

    assert fills[1] == "#216e39"
    assert fills[2] == "#9be9a8"
    assert fills[0] == fills[3] == "#ebedf0"
    assert titles[0] == "2023-12-31: 0 contributions"
    assert titles[1] == "2024-01-01: 5 contributions"
    assert titles[2] == "2024-01-02: 1 contribution"


def test_build_drawing_second_week_shifts_columns() -> None:
    grid = build_grid({}, date(2024, 1, 1), date(2024, 1, 8))
    root = ET.fromstring(build_drawing(grid, cell_size=12, gap=3).tostring())
    rects = root.findall(f"{SVG}rect")[1:]

    assert len(rects) == 14
    assert rects[7].get("x") == "35"
    assert rects[7].get("y") == "12"


@pytest.mark.parametrize(
    ("count", "expected"),
    [(0, "2024-01-01: 0 contributions"), (1, "2024-01-01: 1 contribution"), (2, "2024-01-01: 2 contributions")],
)
def test_cell_title_pluralizes_unless_one(count: int, expected: str) -> None:
    assert cell_title("2024-01-01", count) == expected


def test_write_svg_overwrites_and_is_deterministic(tmp_path) -> None:
    target = tmp_path / "combined-graph.svg"
    target.write_text("stale", encoding="utf-8")
    grid = build_grid({date(2024, 1, 1): 3}, date(2024, 1, 1), date(2024, 1, 3))

    write_svg(build_drawing(grid, cell_size=12, gap=3), target)
    first = target.read_bytes()
    write_svg(build_drawing(grid, cell_size=12, gap=3), target)
    second = target.read_bytes()

    assert first == second
    assert first.startswith(b"<?xml")
    assert b"stale" not in first


def test_write_svg_raises_render_error(tmp_path) -> None:
    grid = build_grid({}, date(2024, 1, 1), date(2024, 1, 3))
    target = tmp_path / "missing" / "combined-graph.svg"

    with pytest.raises(RenderError) as exc_info:
        write_svg(build_drawing(grid, cell_size=12, gap=3), target)

    assert exc_info.value.path == target
