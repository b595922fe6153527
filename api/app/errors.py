class MotesError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MotesError):
    status_code = 400


class NotFoundError(MotesError):
    status_code = 404


class UpstreamError(MotesError):
    """The email provider (or another remote service) answered with a non-2xx status."""

    status_code = 502

    def __init__(self, message: str, upstream_status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.upstream_status = upstream_status
        self.body = body


class ConfigurationError(MotesError):
    status_code = 500
