from typing import Optional

from pydantic import BaseModel, ConfigDict

from galaxy_reporter.enumerations import Defaults


class Tool(BaseModel):
    """A tool registered in the Galaxy tool panel"""
    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    name: str
    description: Optional[str] = None
    panel_section_name: Optional[str] = None
    version: Optional[str] = None

    @property
    def is_qualified(self) -> bool:
        # Toolshed-installed tools carry their repository path in the id.
        return "/" in self.id

    @property
    def section(self) -> str:
        return self.panel_section_name or Defaults.UNGROUPED.value

    @property
    def description_or_default(self) -> str:
        return self.description or Defaults.NO_DESCRIPTION.value
