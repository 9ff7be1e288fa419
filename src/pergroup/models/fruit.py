from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class Fruit(BaseModel):
    type: str
    variety: str
    price: float = Field(ge=0)

    @field_validator("type", "variety", mode="before")
    @classmethod
    def _normalize_label(cls, v: Any) -> str:
        if v is None:
            raise ValueError("label cannot be empty")
        text = str(v).strip().lower()
        if not text:
            raise ValueError("label cannot be empty")
        return text

    @field_validator("price", mode="before")
    @classmethod
    def _parse_price(cls, v: Any) -> Any:
        # Accept "$2.79" style strings from hand-written record files
        if isinstance(v, str):
            return v.strip().lstrip("$")
        return v
