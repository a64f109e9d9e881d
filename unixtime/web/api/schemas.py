"""Pydantic models shared across API routes."""
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OptionItem(BaseModel):
    value: str
    label: str

    model_config = ConfigDict(from_attributes=True)


class ShortcutItem(BaseModel):
    label: str
    region: str
    city: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OptionsResponse(BaseModel):
    regions: List[OptionItem]
    shortcuts: List[ShortcutItem]
    default_text_format: str
    default_timezone: str
    strict_conversion: bool
    midnight_uses_selected_timezone: bool


class CitiesResponse(BaseModel):
    region: str
    cities: List[OptionItem]


class SelectionModel(BaseModel):
    region: Optional[str] = None
    city: Optional[str] = None
    text_format: str = ""

    model_config = ConfigDict(from_attributes=True)


class SelectionResponse(SelectionModel):
    complete: bool = False
    zone: Optional[str] = None


class RegionChange(BaseModel):
    selection: SelectionModel = Field(default_factory=SelectionModel)
    region: str


class CityChange(BaseModel):
    selection: SelectionModel
    city: Optional[str] = None


class FormatChange(BaseModel):
    selection: SelectionModel
    text_format: str


class ShortcutChange(BaseModel):
    selection: SelectionModel = Field(default_factory=SelectionModel)
    label: str


class InitialStateResponse(BaseModel):
    selection: SelectionResponse
    unixtime: int
    text_time: str
    zone: str


class ToUnixtimeRequest(BaseModel):
    text_time: str
    text_format: str
    region: Optional[str] = None
    city: Optional[str] = None


class ToTextTimeRequest(BaseModel):
    unixtime: Union[int, str]
    text_format: str
    region: Optional[str] = None
    city: Optional[str] = None

    @field_validator("unixtime", mode="before")
    @classmethod
    def keep_typed_text(cls, value):  # type: ignore[override]
        # bools and floats are not epoch seconds as typed; let the converter reject them as text
        if isinstance(value, (bool, float)):
            return str(value)
        return value


class UnixtimeResponse(BaseModel):
    unixtime: Optional[int]
    valid: bool = True
    error: Optional[str] = None


class TextTimeResponse(BaseModel):
    text_time: str
    valid: bool = True
    error: Optional[str] = None
