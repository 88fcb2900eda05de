"""Backend client wiring for request handlers."""

from fastapi import Request

from email_service.resend_adapter import ResendMailer
from hospital_api.utils.config import Settings
from supabase_service.supabase_adapter import SupabaseAdapter


def build_data_client(settings: Settings) -> SupabaseAdapter:
    """Table client authenticated with the anon key."""

    return SupabaseAdapter(
        url=settings.supabase_url,
        api_key=settings.supabase_anon_key,
        timeout_seconds=settings.supabase_timeout_seconds,
    )


def build_admin_client(settings: Settings) -> SupabaseAdapter:
    """Identity admin client authenticated with the service-role key."""

    return SupabaseAdapter(
        url=settings.supabase_url,
        api_key=settings.supabase_service_role_key,
        timeout_seconds=settings.supabase_timeout_seconds,
    )


def build_mailer(settings: Settings) -> ResendMailer:
    return ResendMailer(
        api_key=settings.resend_api_key,
        sender=settings.email_from,
        redirect_to=settings.email_redirect_to,
    )


def get_data_client(request: Request) -> SupabaseAdapter:
    return request.app.state.data_client


def get_admin_client(request: Request) -> SupabaseAdapter:
    return request.app.state.admin_client


def get_mailer(request: Request) -> ResendMailer:
    return request.app.state.mailer
