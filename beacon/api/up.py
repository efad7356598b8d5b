from fastapi import APIRouter

from beacon.domain.health import LivenessReport, check_liveness

LIVENESS_PATH = '/up'

router = APIRouter(tags=['health'])


@router.api_route(
    LIVENESS_PATH, methods=['GET', 'HEAD'], response_model=LivenessReport
)
async def liveness_check() -> LivenessReport:
    """Liveness check for load balancers and uptime monitors.

    Public, read-only, and always 200 while the process can serve requests.
    """
    return check_liveness()  # type: ignore[call-arg]
