"""Error types raised by the diary core."""


class DiaryError(Exception):
    """Base error for the diary."""


class ValidationError(DiaryError):
    """Caller-correctable problem with a draft or edit session."""


class EmptyNameError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Name is required.")


class LevelOutOfRangeError(ValidationError):
    def __init__(self, field_name: str, value: int) -> None:
        super().__init__(f"{field_name.capitalize()} must be 1...5.")
        self.field_name = field_name
        self.value = value


class InvalidEditStateError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Invalid editing state.")


class RecordNotFoundError(ValidationError):
    def __init__(self, record_id: object | None = None) -> None:
        super().__init__("Item not found.")
        self.record_id = record_id


class StoreError(DiaryError):
    """Failure on the synchronous persistence path."""


class EncodeFailedError(StoreError):
    """The store document could not be encoded."""


class DecodeFailedError(StoreError):
    """The store document could not be decoded."""


class WriteFailedError(StoreError):
    """The store document could not be written to disk."""
