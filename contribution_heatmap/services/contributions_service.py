import logging
from collections.abc import Iterable
from datetime import date

import httpx
import sentry_sdk

from contribution_heatmap.github_api import fetch_contribution_days
from contribution_heatmap.schemas.heatmap import AccountResult
from contribution_heatmap.schemas.heatmap import ContributionDay
from contribution_heatmap.settings import Settings


logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when contributions for one account cannot be fetched."""

    def __init__(self, account: str, message: str) -> None:
        super().__init__(f"{account}: {message}")
        self.account = account
        self.message = message


def fetch_account_days(
    account: str,
    settings: Settings,
    window: tuple[date, date],
    client: httpx.Client,
) -> list[ContributionDay]:
    """Fetch and normalize the contribution days of one account.

    Raises:
        FetchError: If the request fails or the response is malformed.
    """

    from_day, to_day = window
    try:
        raw_days = fetch_contribution_days(
            username=account,
            token=settings.github_token,
            graphql_url=str(settings.github_graphql_url),
            from_day=from_day,
            to_day=to_day,
            client=client,
            timeout=settings.request_timeout_seconds,
        )
        return [
            ContributionDay(date=date.fromisoformat(str(item["date"])), count=item["count"])
            for item in raw_days
        ]
    except httpx.HTTPStatusError as exc:
        raise FetchError(
            account, f"GitHub API returned HTTP {exc.response.status_code}"
        ) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(account, f"GitHub API request failed: {exc}") from exc
    except ValueError as exc:
        raise FetchError(account, str(exc)) from exc


def fetch_all_accounts(
    accounts: Iterable[str],
    settings: Settings,
    window: tuple[date, date],
    client: httpx.Client | None = None,
) -> list[AccountResult]:
    """Fetch every account in order; one failure never stops the others."""

    owns_client = client is None
    if client is None:
        client = httpx.Client()

    results: list[AccountResult] = []
    try:
        for account in accounts:
            logger.info("Fetching contributions for %s", account)
            try:
                days = fetch_account_days(account, settings, window, client)
            except FetchError as exc:
                logger.warning("Failed to fetch for %s: %s", exc.account, exc.message)
                sentry_sdk.capture_exception(exc)
                results.append(AccountResult(account=account, error=exc.message))
                continue
            results.append(AccountResult(account=account, days=days))
    finally:
        if owns_client:
            client.close()

    return results


def aggregate_contributions(results: Iterable[AccountResult]) -> dict[date, int]:
    """Sum daily counts across all accounts that were fetched successfully."""

    aggregated: dict[date, int] = {}
    for result in results:
        if not result.ok:
            continue
        for day in result.days:
            aggregated[day.date] = aggregated.get(day.date, 0) + day.count
    return aggregated
