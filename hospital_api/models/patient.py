"""Patient request schemas."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class PatientCreate(BaseModel):
    """Payload accepted by ``POST /api/patients``.

    Fields are passed through to the ``patients`` table as submitted; the
    backend owns any further validation.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Optional[str] = None
    age: Optional[Any] = None
    condition: Optional[str] = None
    status: Optional[str] = None
    contact_number: Optional[str] = None
    email: Optional[str] = None

    def to_row(self) -> dict:
        return self.model_dump(exclude_unset=True)
