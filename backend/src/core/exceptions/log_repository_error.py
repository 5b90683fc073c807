class LogRepositoryError(Exception):
    def __init__(self, repository: object, cause: BaseException):
        self.repository = repository
        self.cause = cause
        super().__init__(f"{type(repository).__name__} failed to save log: {cause}")
