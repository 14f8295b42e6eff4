from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from diastolic import CanonicalValue
from paste import PasteOptions


class ParseRequest(BaseModel):
    text: str


class ParseResponse(BaseModel):
    values: dict[str, CanonicalValue] = Field(default_factory=dict)
    count: int = 0


class FieldInfo(BaseModel):
    key: str
    label: str
    unit: str
    places: Optional[int] = None
    derived: bool = False


class FieldListResponse(BaseModel):
    fields: list[FieldInfo]


class PasteRequest(BaseModel):
    text: str = ""
    options: PasteOptions = Field(default_factory=PasteOptions)
    in_text_entry: bool = False
    modifier: bool = False
    # Field key -> destination selector; merged over the defaults.
    destinations: dict[str, str] = Field(default_factory=dict)
