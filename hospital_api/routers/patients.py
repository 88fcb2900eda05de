"""Patient routes."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from hospital_api.models.patient import PatientCreate
from hospital_api.services.db import get_data_client
from supabase_service.supabase_adapter import SupabaseAdapter

router = APIRouter()


@router.get("")
async def list_patients(
    data_client: SupabaseAdapter = Depends(get_data_client),
) -> List[Dict[str, Any]]:
    """Return all patients, newest first."""

    return await data_client.select("patients", order="created_at", ascending=False)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_patient(
    payload: PatientCreate,
    data_client: SupabaseAdapter = Depends(get_data_client),
) -> Dict[str, Any]:
    """Insert a patient and return the stored record."""

    return await data_client.insert("patients", payload.to_row())
