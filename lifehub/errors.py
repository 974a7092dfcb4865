"""Exceptions raised by the LifeHub core."""

from lifehub.models.validation import ValidationResult


class LifeHubError(Exception):
    """Base exception for LifeHub."""
    pass


class ValidationFailedError(LifeHubError):
    """
    An intent was rejected. The Store is unchanged.

    The message is safe to show to the user as-is.
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.summary())


class RecordNotFoundError(LifeHubError):
    """No record with the given id exists in the Store."""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"No {collection} record with id {record_id}")
