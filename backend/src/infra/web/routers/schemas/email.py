from infra.web.routers.schemas import CamelModel


class SendLogsEmailRequestDTO(CamelModel):
    to: str | list[str]


class SendLogsEmailResponseDTO(CamelModel):
    sent: bool
