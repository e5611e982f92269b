from fastapi import (
    APIRouter,
    Depends
)

from universe.application.services.auth_service import AuthService
from universe.utils.provider import get_auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/status")
async def auth_status(service: AuthService = Depends(get_auth_service)):
    return await service.status()


@router.post("/logout")
def logout(service: AuthService = Depends(get_auth_service)):
    return service.logout()
