from fastapi import (
    APIRouter,
    Depends,
    Response,
    status
)

from universe.application.services.health_service import HealthService
from universe.utils.provider import get_health_service

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health(service: HealthService = Depends(get_health_service)):
    return service.get_health()


@router.get("/env-check")
def env_check(response: Response, service: HealthService = Depends(get_health_service)):
    check = service.get_env_check()

    if not check["configured"]:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return check


@router.get("/environments")
def environments(service: HealthService = Depends(get_health_service)):
    return service.get_environments()
