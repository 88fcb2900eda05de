"""Public self-service booking router."""

from fastapi import APIRouter, Depends, status

from email_service.resend_adapter import ResendMailer
from hospital_api.models.booking import PublicBookingRequest, PublicBookingResponse
from hospital_api.services.booking import book_public_appointment
from hospital_api.services.db import get_admin_client, get_data_client, get_mailer
from supabase_service.supabase_adapter import SupabaseAdapter

router = APIRouter()


@router.post(
    "/book",
    status_code=status.HTTP_201_CREATED,
    response_model=PublicBookingResponse,
)
async def public_book(
    payload: PublicBookingRequest,
    data_client: SupabaseAdapter = Depends(get_data_client),
    admin_client: SupabaseAdapter = Depends(get_admin_client),
    mailer: ResendMailer = Depends(get_mailer),
) -> PublicBookingResponse:
    """Register the caller if new and book the requested slot."""

    appointment = await book_public_appointment(data_client, admin_client, mailer, payload)
    return PublicBookingResponse(success=True, appointment=appointment)
