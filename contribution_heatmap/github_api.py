from collections.abc import Mapping
from datetime import date
from typing import Any

import httpx


CONTRIBUTIONS_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""


def build_headers(token: str | None) -> dict[str, str]:
    """Build GraphQL request headers, adding auth only when a token exists."""

    headers = {
        "Content-Type": "application/json",
        "User-Agent": "contribution-heatmap",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def fetch_contribution_days(
    username: str,
    token: str | None,
    graphql_url: str,
    from_day: date,
    to_day: date,
    client: httpx.Client,
    timeout: float = 20.0,
) -> list[dict[str, str | int]]:
    """Fetch contribution days for a user and window from GitHub GraphQL API.

    Days come back in week order, then day order, exactly as GitHub groups
    them; partial weeks at the window edges are not trimmed.

    Raises:
        httpx.HTTPError: If the request fails or GitHub returns an error status.
        ValueError: If the response reports errors or misses expected fields.
    """

    variables = {
        "login": username,
        "from": f"{from_day.isoformat()}T00:00:00Z",
        "to": f"{to_day.isoformat()}T23:59:59Z",
    }

    response = client.post(
        graphql_url,
        json={"query": CONTRIBUTIONS_QUERY, "variables": variables},
        headers=build_headers(token),
        timeout=timeout,
    )
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    errors = payload.get("errors")
    if errors:
        messages = [
            str(error.get("message")) if isinstance(error, Mapping) else str(error)
            for error in (errors if isinstance(errors, list) else [errors])
        ]
        raise ValueError(f"GitHub GraphQL returned errors: {'; '.join(messages)}")

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ValueError("GitHub GraphQL data is missing")

    user = data.get("user")
    if not isinstance(user, Mapping):
        raise ValueError("GitHub user not found")

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        raise ValueError("GitHub contributionsCollection is missing")

    calendar = collection.get("contributionCalendar")
    if not isinstance(calendar, Mapping):
        raise ValueError("GitHub contributionCalendar is missing")

    weeks = calendar.get("weeks")
    if not isinstance(weeks, list):
        raise ValueError("GitHub contribution weeks are missing")

    days: list[dict[str, str | int]] = []
    for week in weeks:
        if not isinstance(week, Mapping):
            continue
        contribution_days = week.get("contributionDays")
        if not isinstance(contribution_days, list):
            continue
        for item in contribution_days:
            if not isinstance(item, Mapping):
                continue
            raw_date = item.get("date")
            raw_count = item.get("contributionCount")
            if isinstance(raw_date, str) and isinstance(raw_count, int):
                days.append({"date": raw_date[:10], "count": raw_count})

    return days
