"""Domain error classes.

Error taxonomy for the scoring and synthesis core:
- ValidationError: a record or LLM payload violates a declared bound
- NotFoundError: lookup by id fails

Scoring functions do not raise on empty inputs; they return neutral
scores so callers can always render a result.
"""


class WiguError(Exception):
    """Base class for domain errors.

    Attributes:
        code: Machine-readable error code (e.g., "NOT_FOUND").
        message: Human-readable error message.
        details: Optional list of per-field error details.
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: list[dict] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(WiguError):
    """Field validation failed.

    Raised for missing required fields, ratings or confidences outside
    their declared range, and lists violating size constraints. Values
    are never auto-corrected.
    """

    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
    ) -> None:
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            details=details,
        )


class NotFoundError(WiguError):
    """Record not found.

    Use when a response, insight, synthesis or session lookup fails.
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(code="NOT_FOUND", message=message)
