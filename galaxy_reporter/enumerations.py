from enum import IntEnum, Enum


class NumericLimits(IntEnum):
    """Centralizing numerical limits for the reporters."""

    TOOLS_PER_SECTION = 3
    TIMEOUT = 10


class Defaults(str, Enum):
    """Fallback values used when the server or the invoker leaves something out."""

    GALAXY_URL = "http://localhost:8080"
    UNGROUPED = "Ungrouped"
    NO_DESCRIPTION = "No description"
    NO_TAGS = "None"
    TAG_SEPARATOR = ", "


class GalaxyEndpoint(str, Enum):
    """Galaxy API paths consumed by the reporters."""

    TOOLS = "/api/tools"
    TOOL = "/api/tools/{tool_id}"
    CURRENT_USER = "/api/users/current"
    HISTORIES = "/api/histories"
