from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldType(str, Enum):
    TEXT = "text"
    DATE = "date"
    CHECKBOX = "checkbox"
    SIGNATURE = "signature"


CHECKBOX_CHECKED = "checked"


class FieldPlacement(BaseModel):
    """A field placed by the editor. Coordinates are fractions of the page, y from the top."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Optional[str] = None
    # Kept as a plain string: unknown types are accepted and skipped when rendering.
    type: str
    page: int = 1
    x: float
    y: float
    w: float
    h: float
    value: Optional[str] = None

    @field_validator("id", "value", mode="before")
    @classmethod
    def coerce_to_string(cls, v: Any) -> Optional[str]:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> str:
        return str(v or "").strip().lower()

    @field_validator("page", mode="before")
    @classmethod
    def default_page(cls, v: Any) -> Any:
        # Editors that omit the page mean the first one.
        if v is None or v == "":
            return 1
        return v

    @property
    def field_type(self) -> Optional[FieldType]:
        """The known field type, or None for anything unrecognized."""
        try:
            return FieldType(self.type)
        except ValueError:
            return None


class SignPdfRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    pdf_data: Optional[str] = Field(default=None, alias="pdfData")
    fields: List[FieldPlacement] = Field(default_factory=list)
    # Fallback image for signature fields that carry no value of their own
    signature_image: Optional[str] = Field(default=None, alias="signatureImage")

    @field_validator("fields", mode="before")
    @classmethod
    def default_fields(cls, v: Any) -> Any:
        return [] if v is None else v


class FieldErrorItem(BaseModel):
    field_id: Optional[str] = None
    page: Optional[int] = None
    code: str
    message: str


class SignPdfResponse(BaseModel):
    url: str
    field_errors: List[FieldErrorItem] = Field(default_factory=list)
