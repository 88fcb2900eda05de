"""Appointment request schemas."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

APPOINTMENT_COLUMNS = ("patient_id", "doctor_name", "appointment_date", "reason")


class AppointmentCreate(BaseModel):
    """Payload accepted by the staff ``POST /api/appointments`` route."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    patient_id: Optional[Union[int, str]] = None
    doctor_name: Optional[str] = None
    appointment_date: Optional[str] = None
    reason: Optional[str] = None
    # Only used to address the confirmation email; never stored.
    patient_email: Optional[str] = None

    def to_row(self) -> dict:
        return self.model_dump(include=set(APPOINTMENT_COLUMNS), exclude_unset=True)
