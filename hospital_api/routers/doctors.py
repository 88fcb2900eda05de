"""Doctor routes (read-only)."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from hospital_api.services.db import get_data_client
from supabase_service.supabase_adapter import SupabaseAdapter

router = APIRouter()


@router.get("")
async def list_doctors(
    data_client: SupabaseAdapter = Depends(get_data_client),
) -> List[Dict[str, Any]]:
    return await data_client.select("doctors")
