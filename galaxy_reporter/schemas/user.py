from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """The user owning the API key"""
    model_config = ConfigDict(extra="allow", frozen=True)

    id: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    total_disk_usage: Optional[Union[int, float, str]] = None
    nice_total_disk_usage: Optional[str] = None

    @property
    def is_anonymous(self) -> bool:
        return not (self.username or self.email)
