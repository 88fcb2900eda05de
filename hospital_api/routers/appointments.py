"""Staff appointment routes."""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from email_service.resend_adapter import ResendMailer
from hospital_api.models.appointment import AppointmentCreate
from hospital_api.services.db import get_data_client, get_mailer
from hospital_api.services.notifications import (
    STAFF_CONFIRMATION_SUBJECT,
    send_confirmation,
    staff_confirmation_html,
)
from supabase_service.supabase_adapter import SupabaseAdapter

LOGGER = logging.getLogger(__name__)

router = APIRouter()

APPOINTMENT_WITH_PATIENT = "*,patients(name,contact_number)"


@router.get("")
async def list_appointments(
    data_client: SupabaseAdapter = Depends(get_data_client),
) -> List[Dict[str, Any]]:
    """Return all appointments with patient name and contact, soonest first."""

    return await data_client.select(
        "appointments",
        columns=APPOINTMENT_WITH_PATIENT,
        order="appointment_date",
        ascending=True,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_appointment(
    payload: AppointmentCreate,
    data_client: SupabaseAdapter = Depends(get_data_client),
    mailer: ResendMailer = Depends(get_mailer),
) -> Dict[str, Any]:
    """Insert an appointment, then try to email a confirmation."""

    appointment = await data_client.insert("appointments", payload.to_row())
    LOGGER.info("Appointment created: id=%s", appointment.get("id"))

    await send_confirmation(
        mailer,
        subject=STAFF_CONFIRMATION_SUBJECT,
        html=staff_confirmation_html(
            doctor_name=payload.doctor_name,
            appointment_date=payload.appointment_date,
            reason=payload.reason,
        ),
        to=payload.patient_email,
    )

    return appointment
