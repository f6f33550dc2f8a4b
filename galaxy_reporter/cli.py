import argparse
import logging
from typing import List, Optional

from galaxy_reporter.config import GalaxyConfig
from galaxy_reporter.enumerations import Defaults, NumericLimits
from galaxy_reporter.exceptions import ConfigurationError
from galaxy_reporter.log_setup import configure_logging

logger = logging.getLogger("galaxy_reporter.cli")


def build_parser(with_api_key: bool = True) -> argparse.ArgumentParser:
    description = (
        "Report tools, the current user and their histories from a Galaxy instance"
        if with_api_key
        else "List the tools available on a Galaxy instance"
    )
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "galaxy_url",
        nargs="?",
        default=None,
        help=f"Base URL of the Galaxy instance (default: $GALAXY_URL or {Defaults.GALAXY_URL.value})",
    )
    if with_api_key:
        parser.add_argument(
            "api_key",
            nargs="?",
            default=None,
            help="Galaxy API key; enables the user and history reports",
        )
    parser.add_argument(
        "--timeout", type=float, default=None,
        help=f"Request timeout in seconds (default: {int(NumericLimits.TIMEOUT)})",
    )
    parser.add_argument(
        "--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic log level written to stderr (default: INFO)",
    )
    return parser


def parse_config(argv: Optional[List[str]] = None, with_api_key: bool = True) -> GalaxyConfig:
    """Parse command line arguments into a GalaxyConfig and set up logging."""
    parser = build_parser(with_api_key=with_api_key)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        config = GalaxyConfig.from_sources(
            galaxy_url=args.galaxy_url,
            api_key=getattr(args, "api_key", None),
            timeout=args.timeout,
        )
    except ConfigurationError as e:
        parser.error(e.detail)

    logger.debug(f"Using Galaxy at {config.galaxy_url} (authenticated={config.authenticated})")
    return config
