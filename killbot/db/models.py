from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

INVALID_REGION_ID = -1


class Organization(BaseModel):
    """Represents a tracked corporation and its notification cursors.

    ``id`` is ``None`` or 0 until the corporation has been stored.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: Optional[int] = None
    eve_corporation_id: int = Field(..., frozen=True)
    last_kill_id: int = 0
    last_loss_id: int = 0
    name: str = ""
    kill_comment: str = ""
    loss_comment: str = ""
    ignored_regions: List[int] = Field(default_factory=list)

    @field_validator("name", "kill_comment", "loss_comment", mode="before")
    def null_as_empty(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    @property
    def is_persisted(self) -> bool:
        return self.id is not None and self.id > 0

    def is_region_ignored(self, region_id: int) -> bool:
        """Return True if kills in *region_id* should not be posted."""
        return region_id in self.ignored_regions
