class ServiceError(Exception):
    """Base for errors that are rendered to the client as {"error": message}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class PayloadTooLargeError(ServiceError):
    status_code = 413


class RemoteProviderError(Exception):
    """A third-party AI call failed or returned something unusable.

    Never shown to the client directly: the service turns it into a
    mock-fallback report carrying the message.
    """
