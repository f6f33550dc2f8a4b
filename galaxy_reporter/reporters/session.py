from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from galaxy_reporter.client import ApiFailure, GalaxyApi
from galaxy_reporter.enumerations import GalaxyEndpoint
from galaxy_reporter.schemas import History, User

logger = logging.getLogger("galaxy_reporter.reporters.session")

API_KEY_HINT = "Provide an API key to access user-specific data: galaxy-session <galaxy-url> <api-key>"


def parse_histories(data: Iterable[Any]) -> List[History]:
    """Validate history entries one by one, skipping those that are not valid histories."""
    histories: List[History] = []
    for entry in data:
        try:
            histories.append(History.model_validate(entry))
        except ValidationError as e:
            entry_id = entry.get("id") if isinstance(entry, dict) else None
            logger.warning(f"Skipping malformed history entry {entry_id!r}: {e.error_count()} validation error(s)")
    return histories


async def get_current_user(api: Optional[GalaxyApi]) -> Optional[User]:
    """Print and return the user owning the API key, or None when unavailable."""
    if api is None:
        print("\nSkipping current user lookup (no API key).")
        print(API_KEY_HINT)
        return None

    try:
        print("\nFetching current user...")
        result = await api.get(GalaxyEndpoint.CURRENT_USER.value)

        if isinstance(result, ApiFailure):
            logger.error(f"Error fetching current user: {result.error}")
            return None

        if not isinstance(result.data, dict):
            logger.error("No user data returned")
            return None

        user = User.model_validate(result.data)
        if user.is_anonymous:
            logger.error("Galaxy returned an anonymous user, check the API key")
            return None

        print("\nCurrent user:")
        print(f"- Username: {user.username}")
        print(f"- Email: {user.email}")
        print(f"- Total disk usage: {user.nice_total_disk_usage or user.total_disk_usage}")
        return user

    except Exception as e:
        logger.error(f"Error in get_current_user: {e}", exc_info=True)
        return None


async def list_histories(api: Optional[GalaxyApi]) -> List[History]:
    """Print the active, unpublished histories of the current user."""
    if api is None:
        print("\nSkipping history listing (no API key).")
        print(API_KEY_HINT)
        return []

    try:
        print("\nFetching histories...")
        result = await api.get(
            GalaxyEndpoint.HISTORIES.value,
            query={"deleted": "false", "published": "false"},
        )

        if isinstance(result, ApiFailure):
            logger.error(f"Error fetching histories: {result.error}")
            return []

        if not isinstance(result.data, list):
            logger.error("No histories data returned")
            return []

        histories = parse_histories(result.data)

        print(f"\nFound {len(histories)} histories")
        for history in histories:
            print(f"- {history.name} ({history.id})")
            print(f"  Size: {history.nice_size}")
            print(f"  State: {history.state}")
            print(f"  Tags: {history.tags_display}")
        return histories

    except Exception as e:
        logger.error(f"Error in list_histories: {e}", exc_info=True)
        return []
