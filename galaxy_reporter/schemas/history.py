from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from galaxy_reporter.enumerations import Defaults


class History(BaseModel):
    """A specific history in the users galaxy instance"""
    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    name: str
    nice_size: Optional[str] = None
    state: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_are_empty(cls, value):
        return [] if value is None else value

    @property
    def tags_display(self) -> str:
        if not self.tags:
            return Defaults.NO_TAGS.value
        return Defaults.TAG_SEPARATOR.value.join(self.tags)
