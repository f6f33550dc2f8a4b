import asyncio
import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel, Field

from galaxy_reporter.cli import parse_config
from galaxy_reporter.config import GalaxyConfig
from galaxy_reporter.client import create_galaxy_api
from galaxy_reporter.reporters.tools import list_tools
from galaxy_reporter.reporters.session import get_current_user, list_histories
from galaxy_reporter.schemas import History, Tool, User

logger = logging.getLogger("galaxy_reporter.main")


class SessionReport(BaseModel):
    """What a session run managed to fetch"""
    tools: Optional[List[Tool]] = Field(default=None, title="Tools")
    user: Optional[User] = Field(default=None, title="User")
    histories: List[History] = Field(default_factory=list, title="Histories")


def _announce(config: GalaxyConfig) -> None:
    print(f"Connecting to Galaxy at: {config.galaxy_url}")
    print("Fetching tools...")


async def run_tool_catalog(
    config: GalaxyConfig, transport: Optional[httpx.AsyncBaseTransport] = None
) -> Optional[List[Tool]]:
    """List the tool catalog of a Galaxy instance."""
    _announce(config)
    async with create_galaxy_api(config, transport=transport) as api:
        return await list_tools(api)


async def run_session_report(
    config: GalaxyConfig, transport: Optional[httpx.AsyncBaseTransport] = None
) -> SessionReport:
    """
    List the tool catalog, then, when an API key is configured, the current
    user and their histories. Histories are only requested once the user lookup succeeded.
    """
    _announce(config)
    report = SessionReport()

    async with create_galaxy_api(config, transport=transport) as api:
        report.tools = await list_tools(api)

        auth_api = api if api.authenticated else None
        if auth_api is None:
            logger.info("No API key supplied, skipping authenticated requests")
            await get_current_user(None)
            await list_histories(None)
            return report

        report.user = await get_current_user(auth_api)
        if report.user is None:
            logger.warning("Current user unavailable, skipping history listing")
            return report

        report.histories = await list_histories(auth_api)

    return report


def list_tools_main(argv: Optional[List[str]] = None) -> None:
    config = parse_config(argv, with_api_key=False)
    asyncio.run(run_tool_catalog(config))


def session_main(argv: Optional[List[str]] = None) -> None:
    config = parse_config(argv, with_api_key=True)
    asyncio.run(run_session_report(config))
