class LogDecodeError(ValueError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Cannot decode log entry: {reason}")
