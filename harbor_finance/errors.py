"""Error taxonomy shared by the engine, the record manager and the API layer."""


class FinanceError(Exception):
    """Base class for all finance service errors.

    Each subclass carries a stable ``code`` and the HTTP status the API layer
    answers with.
    """
    code = "CALCULATION_ERROR"
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(FinanceError):
    """Bad or out-of-range input. Message is the first failing rule."""
    code = "VALIDATION_ERROR"
    status_code = 400


class UnauthorizedError(FinanceError):
    """No caller identity where one is required."""
    code = "UNAUTHORIZED"
    status_code = 401

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class ForbiddenError(FinanceError):
    """Caller identity present but not the record owner."""
    code = "FORBIDDEN"
    status_code = 403


class NotFoundError(FinanceError):
    code = "NOT_FOUND"
    status_code = 404


class MethodNotAllowedError(FinanceError):
    code = "METHOD_NOT_ALLOWED"
    status_code = 405

    def __init__(self, method: str):
        super().__init__(f"Method {method} not allowed")


class CalculationError(FinanceError):
    """Unexpected failure during computation or persistence.

    The message is always generic; the underlying cause stays in the logs.
    """
    code = "CALCULATION_ERROR"
    status_code = 500
