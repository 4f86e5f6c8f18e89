from pydantic import BaseModel, Field, StrictStr, ValidationError, field_validator
from typing import Optional

from scenario_hub.core.errors import InvalidForm


class InfoDocument(BaseModel):
    """The three fields of ``info.toml`` the service cares about; other keys are ignored."""

    name: StrictStr = Field(min_length=1)
    author: StrictStr = Field(min_length=1)
    time: float = Field(ge=0)

    @field_validator("time", mode="before")
    @classmethod
    def time_must_be_number(cls, v):
        # TOML booleans would otherwise coerce to 0.0 / 1.0
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("time must be a number")
        return float(v)


class ScenarioForm(BaseModel):
    name: str = Field(min_length=1)
    author: str = Field(min_length=1)
    # kept as text, the consistency check parses it
    time: str

    @classmethod
    def from_fields(cls, name: Optional[str], author: Optional[str], time: Optional[str]) -> "ScenarioForm":
        try:
            return cls(name=name, author=author, time=time)
        except ValidationError as exc:
            field = exc.errors()[0]["loc"][0]
            raise InvalidForm(f"Invalid value for {field}") from exc


class ScenarioSummary(BaseModel):
    name: str
    author: str
    time: float
    uuid: str

    class Config:
        from_attributes = True


class ScenarioCreated(BaseModel):
    id: str
    info_file: str
    script_file: str


class ScenarioDetail(ScenarioSummary):
    info_file: str
    script_file: str


class SearchRequest(BaseModel):
    query: Optional[str] = None
