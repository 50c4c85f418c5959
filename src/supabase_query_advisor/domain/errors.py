class AdvisorError(Exception):
    pass


class QueryExecutionError(AdvisorError):
    """The execution backend reported a failure for a statement."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ConfigurationError(AdvisorError):
    pass
