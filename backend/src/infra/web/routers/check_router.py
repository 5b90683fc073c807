from fastapi import APIRouter, HTTPException, Request, status

from infra.web.routers.schemas.check import CheckRequestDTO, CheckResponseDTO

router = APIRouter(prefix="/checks", tags=["Checks"])


@router.post(
    "",
    response_model=CheckResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def run_check(payload: CheckRequestDTO, request: Request) -> CheckResponseDTO:
    monitor_service = getattr(request.app.state, "monitor_service", None)

    if monitor_service is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Monitor service not started")

    result = await monitor_service.trigger_immediate_check(payload.url)

    return CheckResponseDTO(
        url=result.url,
        ok=result.ok,
        status_code=result.status_code,
        error=result.error,
    )
