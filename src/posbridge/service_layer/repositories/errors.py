"""Repository-related error definitions.

Every error names the operation that failed and the ID it was working on.
Wrapped causes are chained with ``raise ... from ...``.
"""


class RepositoryError(Exception):
    """Base class for repository-related errors.

    Attributes:
        operation (str): Name of the repository operation that failed.
        entity_id (str): ID the operation was working on ("" if none was given).
    """

    def __init__(self, operation: str, entity_id: str, reason: str) -> None:
        super().__init__(f"{operation}({entity_id}): {reason}")
        self.operation = operation
        self.entity_id = entity_id


class ValidationError(RepositoryError):
    """Raised when a required field is missing. The caller's fault; never retried.

    Attributes:
        field (str): Name of the offending field.
    """

    def __init__(self, operation: str, field: str, entity_id: str = "") -> None:
        super().__init__(operation, entity_id, f"{field} cannot be empty")
        self.field = field


class NotFoundError(RepositoryError):
    """Raised when a referenced entity does not exist.

    Attributes:
        kind (str): Entity type, e.g. "Integration".
    """

    def __init__(self, operation: str, kind: str, entity_id: str) -> None:
        super().__init__(operation, entity_id, f"{kind} with ID {entity_id} not found")
        self.kind = kind


class PersistenceError(RepositoryError):
    """Raised when the backing store fails or a document cannot be (de)serialized.

    The caller may retry; the repository itself never does.

    Attributes:
        cause (BaseException | None): The wrapped root cause.
    """

    def __init__(
        self,
        operation: str,
        entity_id: str,
        reason: str,
        cause: BaseException | None = None,
    ) -> None:
        if cause is not None:
            reason = f"{reason}: {cause}"
        super().__init__(operation, entity_id, reason)
        self.cause = cause
