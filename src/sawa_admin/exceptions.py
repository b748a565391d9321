"""Dashboard exceptions.

Gateways never raise for failed upstream calls; they return a Result (see
schemas/result.py). These exceptions belong to the dashboard's own HTTP
boundary: routers raise them and the handlers in main.py translate them
into the standard error envelope or a redirect.
"""


class DomainError(Exception):
    """Base class for all dashboard exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when the marketplace API reports an entity as missing."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with id {identifier} not found")


class FormValidationError(DomainError):
    """Raised when a dialog's form fails client-side validation.

    ``fields`` maps a dotted field path (``name.ar``) to its first message.
    """

    def __init__(self, fields: dict[str, str]) -> None:
        self.fields = fields
        super().__init__("Form validation failed")


class SessionExpiredError(DomainError):
    """Raised when the session guard asked for a redirect to the login page."""

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(f"Session expired, redirecting to {location}")
