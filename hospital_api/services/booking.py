"""Public self-service booking flow."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Tuple

from email_service.resend_adapter import ResendMailer
from hospital_api.models.booking import PublicBookingRequest
from hospital_api.services.errors import ApiError, SlotConflictError, WeakPasswordError
from hospital_api.services.notifications import (
    PUBLIC_CONFIRMATION_SUBJECT,
    public_confirmation_html,
    send_confirmation,
)
from supabase_service.supabase_adapter import SupabaseAdapter, SupabaseError

LOGGER = logging.getLogger(__name__)

CLASH_WINDOW = timedelta(minutes=30)
MIN_PASSWORD_LENGTH = 6
NEW_PATIENT_STATUS = "Outpatient"
PATIENT_ROLE = "patient"


def format_doctor_label(doctor_name: str, doctor_specialty: str) -> str:
    """Return the stored doctor label, also used as the clash key.

    The label is compared verbatim, so spacing or casing differences between
    requests produce distinct keys.
    """

    return f"{doctor_name} ({doctor_specialty})"


def clash_window(requested: datetime) -> Tuple[str, str]:
    """Return the inclusive UTC bounds around ``requested``."""

    if requested.tzinfo is None:
        requested = requested.astimezone()
    requested = requested.astimezone(timezone.utc)
    return (
        (requested - CLASH_WINDOW).isoformat(),
        (requested + CLASH_WINDOW).isoformat(),
    )


async def ensure_slot_available(
    data_client: SupabaseAdapter,
    *,
    doctor_label: str,
    requested: datetime,
) -> None:
    """Raise SlotConflictError when the doctor has a booking within the window."""

    window_start, window_end = clash_window(requested)
    conflicts = await data_client.select(
        "appointments",
        columns="id",
        filters=[
            ("doctor_name", "eq", doctor_label),
            ("appointment_date", "gte", window_start),
            ("appointment_date", "lte", window_end),
        ],
    )
    if conflicts:
        LOGGER.info(
            "Slot conflict for doctor=%s at %s (%d existing)",
            doctor_label,
            requested.isoformat(),
            len(conflicts),
        )
        raise SlotConflictError()


async def resolve_patient_id(
    data_client: SupabaseAdapter,
    admin_client: SupabaseAdapter,
    payload: PublicBookingRequest,
) -> Any:
    """Reuse the patient with this contact number or register a new one."""

    existing = await data_client.select_maybe_single(
        "patients",
        columns="id",
        filters=[("contact_number", "eq", payload.contact_number)],
    )
    if existing:
        LOGGER.debug("Reusing patient id=%s", existing.get("id"))
        return existing["id"]

    if not payload.password or len(payload.password) < MIN_PASSWORD_LENGTH:
        raise WeakPasswordError()

    try:
        auth_user = await admin_client.create_auth_user(
            email=payload.email,
            password=payload.password,
            email_confirm=True,
            user_metadata={"role": PATIENT_ROLE, "name": payload.name},
        )
    except SupabaseError as exc:
        LOGGER.error("Auth user creation failed: %s", exc.message)
        raise ApiError(f"Failed to create user account: {exc.message}") from exc

    LOGGER.info("Auth user created: %s", auth_user.get("id"))

    patient = await data_client.insert(
        "patients",
        {
            "name": payload.name,
            "age": payload.age,
            "condition": payload.condition,
            "contact_number": payload.contact_number,
            "status": NEW_PATIENT_STATUS,
            "email": payload.email,
        },
    )
    return patient["id"]


async def book_public_appointment(
    data_client: SupabaseAdapter,
    admin_client: SupabaseAdapter,
    mailer: ResendMailer,
    payload: PublicBookingRequest,
) -> Dict[str, Any]:
    """Run the public booking flow and return the created appointment."""

    LOGGER.info(
        "Booking request: doctor=%s appointment_date=%s",
        payload.doctor_name,
        payload.appointment_date.isoformat(),
    )

    doctor_label = format_doctor_label(payload.doctor_name, payload.doctor_specialty)
    await ensure_slot_available(
        data_client,
        doctor_label=doctor_label,
        requested=payload.appointment_date,
    )

    patient_id = await resolve_patient_id(data_client, admin_client, payload)

    appointment = await data_client.insert(
        "appointments",
        {
            "patient_id": patient_id,
            "doctor_name": doctor_label,
            "appointment_date": payload.appointment_date.isoformat(),
            "reason": payload.reason,
        },
    )

    await send_confirmation(
        mailer,
        subject=PUBLIC_CONFIRMATION_SUBJECT,
        html=public_confirmation_html(
            patient_name=payload.name or "",
            doctor_name=payload.doctor_name,
            doctor_specialty=payload.doctor_specialty,
            appointment_date=payload.appointment_date,
        ),
        to=payload.email,
    )

    return appointment
