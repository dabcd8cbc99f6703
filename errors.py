"""Exceptions raised by the service layer and translated to HTTP responses in main.py"""


class ConfigurationError(RuntimeError):
    """Mandatory settings are missing for a call path"""


class ClientInputError(ValueError):
    """The caller sent an incomplete or unusable request (4xx)"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingField(ClientInputError):
    pass


class InvalidRoomImage(ClientInputError):
    pass


class CatalogUnavailable(Exception):
    """Shopify answered with a non-success status or a GraphQL error payload"""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Shopify error: {status_code} {body}")
        self.status_code = status_code
        self.body = body


class UploadFailed(Exception):
    """Cloudinary did not return a usable URL"""

    def __init__(self, detail: str):
        super().__init__(f"Cloudinary upload failed: {detail}")
        self.detail = detail
