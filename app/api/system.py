from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    response_class=PlainTextResponse,
)
async def health_check():
    """Liveness check; uptime pingers hit this to keep the instance awake."""
    return PlainTextResponse("OK", status_code=status.HTTP_200_OK)
