"""Dashboard router."""

from typing import Dict

from fastapi import APIRouter, Depends

from hospital_api.services.db import get_data_client
from hospital_api.services.stats import collect_dashboard_stats
from supabase_service.supabase_adapter import SupabaseAdapter

router = APIRouter()


@router.get("/stats")
async def dashboard_stats(
    data_client: SupabaseAdapter = Depends(get_data_client),
) -> Dict[str, int]:
    """Return patient, doctor and appointment totals plus today's appointments."""

    return await collect_dashboard_stats(data_client)
