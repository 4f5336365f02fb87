"""Calendar source declarations.

Sources form a closed union discriminated on ``type``. Code that branches on
the kind of a source matches on the concrete classes and ends with
``assert_never`` so a new kind cannot be added silently.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class LocalSource(BaseModel):
    """Events stored as documents under a vault directory."""

    model_config = ConfigDict(frozen=True)

    type: Literal["local"] = "local"
    directory: str
    color: str | None = None


class RemoteSource(BaseModel):
    """Read-only remote calendar, identified by its calendar id or URL."""

    model_config = ConfigDict(frozen=True)

    type: Literal["gcal"] = "gcal"
    url: str
    color: str | None = None


class ICSSource(BaseModel):
    """Read-only iCalendar feed. Declared but not loaded yet."""

    model_config = ConfigDict(frozen=True)

    type: Literal["ical"] = "ical"
    url: str
    color: str | None = None


CalendarSource = Annotated[
    Union[LocalSource, RemoteSource, ICSSource], Field(discriminator="type")
]
