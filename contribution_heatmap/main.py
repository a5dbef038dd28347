import logging
from datetime import date
from pathlib import Path

import httpx

from contribution_heatmap.core.observability import LOG_FORMAT
from contribution_heatmap.core.observability import configure_logging
from contribution_heatmap.core.observability import init_sentry
from contribution_heatmap.render.svg import OUTPUT_FILENAME
from contribution_heatmap.render.svg import RenderError
from contribution_heatmap.render.svg import build_drawing
from contribution_heatmap.render.svg import write_svg
from contribution_heatmap.services.contributions_service import aggregate_contributions
from contribution_heatmap.services.contributions_service import fetch_all_accounts
from contribution_heatmap.services.heatmap_service import build_grid
from contribution_heatmap.services.window import contribution_window
from contribution_heatmap.settings import ConfigError
from contribution_heatmap.settings import Settings
from contribution_heatmap.settings import load_settings


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2


def run(
    settings: Settings,
    today: date | None = None,
    output_path: Path | str = OUTPUT_FILENAME,
    client: httpx.Client | None = None,
) -> int:
    """Fetch, aggregate and render contributions; return the process exit code.

    Raises:
        RenderError: If the output file cannot be written.
    """

    if not settings.github_token:
        logger.warning(
            "no GitHub token found in environment; requests may be rate-limited "
            "and private contributions won't appear"
        )

    window = contribution_window(settings.days, today=today)
    results = fetch_all_accounts(settings.accounts, settings, window, client=client)
    counts = aggregate_contributions(results)

    grid = build_grid(counts, *window)
    drawing = build_drawing(grid, cell_size=settings.cell_size, gap=settings.gap)
    target = write_svg(drawing, output_path)
    logger.info(
        "%s written (days: %d, weeks: %d)", target.name, len(grid.cells), grid.weeks
    )

    failed = [result.account for result in results if not result.ok]
    if failed:
        logger.warning(
            "contributions missing for %d of %d accounts: %s",
            len(failed),
            len(results),
            ", ".join(failed),
        )
        return EXIT_PARTIAL
    return EXIT_OK


def main() -> int:
    """Console entry point."""

    try:
        settings = load_settings()
    except ConfigError as exc:
        logging.basicConfig(format=LOG_FORMAT)
        logger.error("%s", exc)
        return EXIT_FATAL

    configure_logging(settings)
    init_sentry(settings)

    try:
        return run(settings)
    except RenderError as exc:
        logger.error("could not write heatmap: %s", exc)
        return EXIT_FATAL
