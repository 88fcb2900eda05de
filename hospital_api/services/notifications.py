"""Appointment confirmation emails.

Delivery is best-effort: a missing API key skips sending and any failure is
logged without reaching the caller.
"""

from __future__ import annotations

import logging
from datetime import datetime
from html import escape
from typing import List, Optional, Union

from fastapi.concurrency import run_in_threadpool

from email_service.resend_adapter import ResendMailer

LOGGER = logging.getLogger(__name__)

STAFF_CONFIRMATION_SUBJECT = "Appointment Confirmation"
PUBLIC_CONFIRMATION_SUBJECT = "Appointment Confirmed"


def format_appointment_time(value: Union[str, datetime, None]) -> str:
    """Render an appointment time in the server's local time zone."""

    if value is None:
        return ""

    if isinstance(value, datetime):
        moment = value
    else:
        try:
            moment = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return str(value)

    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.strftime("%d %b %Y, %I:%M %p")


def staff_confirmation_html(
    *,
    doctor_name: Optional[str],
    appointment_date: Union[str, datetime, None],
    reason: Optional[str],
) -> str:
    return (
        "<h1>Appointment Confirmed</h1>"
        f"<p>Your appointment with <strong>{escape(doctor_name or '')}</strong> "
        f"is scheduled for <strong>{escape(format_appointment_time(appointment_date))}</strong>.</p>"
        f"<p>Reason: {escape(reason or '')}</p>"
    )


def public_confirmation_html(
    *,
    patient_name: str,
    doctor_name: str,
    doctor_specialty: str,
    appointment_date: Union[str, datetime, None],
) -> str:
    return (
        "<h1>Appointment Confirmed</h1>"
        f"<p>Dear {escape(patient_name)},</p>"
        f"<p>Your appointment with <strong>{escape(doctor_name)}</strong> "
        f"({escape(doctor_specialty)}) is scheduled for "
        f"<strong>{escape(format_appointment_time(appointment_date))}</strong>.</p>"
    )


async def send_confirmation(
    mailer: ResendMailer,
    *,
    subject: str,
    html: str,
    to: Optional[Union[str, List[str]]] = None,
) -> bool:
    """Try to send a confirmation email. Returns True when it was sent."""

    if not mailer.enabled:
        LOGGER.debug("Email disabled; skipping %r", subject)
        return False

    if not mailer.resolve_recipients(to):
        LOGGER.warning("No recipient for %r; skipping email", subject)
        return False

    try:
        await run_in_threadpool(mailer.send, subject=subject, html=html, to=to)
    except Exception:
        LOGGER.exception("Email sending failed: subject=%r", subject)
        return False

    return True
