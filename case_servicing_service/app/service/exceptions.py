"""
Custom exceptions for the Case Servicing service.

Two families live here. ``CustomException`` subclasses are structured markers
that travel inside an outcome envelope so the transport layer can pick a
status code; they are never raised across a layer boundary. The remaining
classes are genuine faults and are raised.
"""

class BaseCaseServicingError(Exception):
    """Base class for exceptions in this module."""
    pass

class CustomException(BaseCaseServicingError):
    """Structured failure marker carried by an outcome envelope."""
    kind: str = "Custom"
    http_status_code: int = 400

    def __init__(self, message: str = "A validation error occurred."):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}

class ConflictException(CustomException):
    """More than one record matched an identifier expected to be unique."""
    kind = "Conflict"
    http_status_code = 409

class NotFoundException(CustomException):
    kind = "NotFound"
    http_status_code = 204

class TooManyRequestsException(CustomException):
    kind = "TooManyRequests"
    http_status_code = 429

class UnexpectedFaultException(CustomException):
    """Attached by the request pipeline when a handler raised."""
    kind = "UnexpectedFault"
    http_status_code = 500

class ReferenceNumberPrefixError(BaseCaseServicingError, LookupError):
    """Raised when a channel or business segment has no reference number prefix."""
    def __init__(self, parameter: str, value):
        self.parameter = parameter
        self.value = value
        super().__init__(f"No reference number prefix is mapped for {parameter} '{value}'.")

class ReferenceNumberGenerationError(BaseCaseServicingError):
    """Raised when a unique id and reference number could not be produced."""
    def __init__(self, entity_name: str, attempts: int):
        self.entity_name = entity_name
        self.attempts = attempts
        super().__init__(
            f"Unable to generate a unique {entity_name} id and reference number after {attempts} attempts."
        )
