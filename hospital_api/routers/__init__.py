"""API router initializers."""

from fastapi import APIRouter


def get_api_router() -> APIRouter:
    """Construct and return the API router."""

    from hospital_api.routers.appointments import router as appointments_router
    from hospital_api.routers.dashboard import router as dashboard_router
    from hospital_api.routers.doctors import router as doctors_router
    from hospital_api.routers.patients import router as patients_router
    from hospital_api.routers.public import router as public_router

    api_router = APIRouter(prefix="/api")
    api_router.include_router(patients_router, prefix="/patients", tags=["patients"])
    api_router.include_router(appointments_router, prefix="/appointments", tags=["appointments"])
    api_router.include_router(doctors_router, prefix="/doctors", tags=["doctors"])
    api_router.include_router(public_router, prefix="/public", tags=["public"])
    api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
    return api_router
