from galaxy_reporter.schemas.tool import Tool
from galaxy_reporter.schemas.user import User
from galaxy_reporter.schemas.history import History

__all__ = ["Tool", "User", "History"]
