class EmailDeliveryError(Exception):
    def __init__(self, reason: str = ""):
        self.reason = reason
        super().__init__(reason)


def describe_error(error: BaseException | str) -> str:
    """Render a sender failure as the text stored in the error log entry.

    Plain strings are already a description and are kept verbatim. Exceptions
    are prefixed with ``Error:`` and fall back to their class name when they
    carry no message.
    """
    if isinstance(error, str):
        return error

    message = str(error)
    if not message:
        message = type(error).__name__

    return f"Error: {message}"
