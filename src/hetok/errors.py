"""Custom exception hierarchy for hetok tokenization errors."""


class HETokError(Exception):
    """Base exception for all hetok errors."""


class ConfigError(HETokError):
    """Raised when tokenizer options are unknown or carry invalid values."""

    def __init__(
        self,
        message: str,
        *,
        invalid_name: str | None = None,
        available: list[str] | None = None,
    ) -> None:
        extra = " "
        if invalid_name:
            extra += f"(got {invalid_name!r}) "
        if available:
            extra += f"(available: {available}) "
        super().__init__(message + extra)
        self.invalid_name = invalid_name
        self.available = available


class TrainingError(HETokError):
    """Raised when tokenizer training input is invalid."""


class VocabPayloadError(HETokError):
    """Raised when a serialized vocabulary payload or model file is invalid."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        model_path: str | None = None,
        version_mismatch: tuple[str, str] | None = None,
    ) -> None:
        extra = " "
        if field:
            extra += f"(field: {field}) "
        if model_path:
            extra += f"(path: {model_path}) "
        if version_mismatch is not None:
            extra += f"(expected: {version_mismatch[1]}) (got {version_mismatch[0]}) "
        super().__init__("invalid vocabulary payload: " + message + extra)
        self.field = field
        self.model_path = model_path
        self.version_mismatch = version_mismatch
