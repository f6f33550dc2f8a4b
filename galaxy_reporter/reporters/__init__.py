from galaxy_reporter.reporters.tools import list_tools, group_tools, select_detail_tool
from galaxy_reporter.reporters.session import get_current_user, list_histories

__all__ = ["list_tools", "group_tools", "select_detail_tool", "get_current_user", "list_histories"]
