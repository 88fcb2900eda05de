"""Public self-service booking schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class PublicBookingRequest(BaseModel):
    """Inbound payload for ``POST /api/public/book``."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[Any] = None
    condition: Optional[str] = None
    contact_number: str
    doctor_name: str
    doctor_specialty: str
    appointment_date: datetime
    reason: Optional[str] = None
    password: Optional[str] = None


class PublicBookingResponse(BaseModel):
    """Outbound contract for a successful public booking."""

    success: bool = True
    appointment: Dict[str, Any]
