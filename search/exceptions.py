from typing import Optional


class InvalidSearchCriteria(Exception):
    """Thrown when search criteria are missing or malformed"""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__(
            "; ".join(f"{field}: {' '.join(messages)}" for field, messages in errors.items())
        )
        self.errors = errors


class StorageError(Exception):
    """Thrown when the inventory cannot be read"""

    def __init__(
            self,
            operation: Optional[str] = None,
            message: Optional[str] = None
    ) -> None:
        if message is None:
            message = f"Inventory query failed: {operation}" if operation else "Inventory query failed."
        super().__init__(message)
        self.operation = operation
