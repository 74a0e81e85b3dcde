"""Account-level asset filters.

The filter chain narrows a raw asset list down to what a frame should show.
All predicates are conjunctive, so their order does not change the result.
"""

from collections.abc import Iterable
from datetime import date, datetime, time, timedelta, timezone

from framepool.config import AccountSettings
from framepool.models import Asset, AssetType, as_utc


def start_of_day(day: date) -> datetime:
    """Midnight UTC of the given calendar day."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def resolve_date_bounds(
    settings: AccountSettings, today: date | None = None
) -> tuple[datetime | None, datetime | None]:
    """
    Resolve the inclusive (lower, upper) date bounds for an account.

    `images_from_date` takes precedence over `images_from_days`.

    Args:
        settings: Account settings
        today: Calendar date used for `images_from_days` (defaults to today, UTC)

    Returns:
        (lower, upper) tuple; either side may be None
    """
    upper = as_utc(settings.images_until_date) if settings.images_until_date else None

    lower = None
    if settings.images_from_date is not None:
        lower = as_utc(settings.images_from_date)
    elif settings.images_from_days is not None:
        today = today or datetime.now(timezone.utc).date()
        lower = start_of_day(today - timedelta(days=settings.images_from_days))

    return lower, upper


def apply_account_filters(
    assets: Iterable[Asset],
    settings: AccountSettings,
    today: date | None = None,
) -> list[Asset]:
    """
    Filter raw assets according to the account settings.

    Args:
        assets: Raw assets as returned by a loader
        settings: Account settings
        today: Calendar date used to resolve relative bounds

    Returns:
        Assets that pass every configured predicate (possibly empty)
    """
    # Display only images
    filtered = [a for a in assets if a.type == AssetType.IMAGE]

    if not settings.show_archived:
        filtered = [a for a in filtered if not a.is_archived]

    lower, upper = resolve_date_bounds(settings, today)
    if upper is not None:
        filtered = [a for a in filtered if a.effective_date <= upper]
    if lower is not None:
        filtered = [a for a in filtered if a.effective_date >= lower]

    if settings.rating is not None:
        filtered = [a for a in filtered if a.rating == settings.rating]

    return filtered


__all__ = ["apply_account_filters", "resolve_date_bounds", "start_of_day"]
