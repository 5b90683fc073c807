from fastapi import APIRouter, HTTPException, Request, status

from infra.adapter.log_repository_factory import get_primary_log_repository
from infra.web.routers.schemas.email import SendLogsEmailRequestDTO, SendLogsEmailResponseDTO
from use_cases.email.send_email_logs_use_case import SendEmailLogsUseCase

router = APIRouter(prefix="/emails", tags=["Emails"])


@router.post(
    "/logs",
    response_model=SendLogsEmailResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def send_logs_email(payload: SendLogsEmailRequestDTO, request: Request) -> dict[str, bool]:
    email_sender = getattr(request.app.state, "email_sender", None)

    if email_sender is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Mailer not configured")

    use_case = SendEmailLogsUseCase(email_sender, get_primary_log_repository())

    return {"sent": await use_case.execute(payload.to)}
