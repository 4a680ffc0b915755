"""
Custom exceptions for infocanvas.

This module defines all custom exceptions used throughout the application.
"""


class InfocanvasError(Exception):
    """Base exception for all infocanvas errors."""

    pass


class ValidationError(InfocanvasError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = "") -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Name of the field that failed validation (optional)
        """
        self.field = field
        super().__init__(message)


class CapacityExceededError(ValidationError):
    """Raised when a reference image is added to a full reference set."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(
            f"Maximum {limit} reference images allowed.", field="reference_images"
        )


class EmptyNameError(ValidationError):
    """Raised when a preset is saved without a name."""

    def __init__(self) -> None:
        super().__init__("Preset name cannot be empty", field="name")


class IndexOutOfRangeError(ValidationError):
    """Raised when a reference image index does not exist."""

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(
            f"Reference image index {index} is out of range (have {count}).",
            field="index",
        )


class ConfigurationError(InfocanvasError):
    """Raised when there is a configuration problem (e.g. missing API key)."""

    pass


class GenerationInProgressError(InfocanvasError):
    """Raised when a generation is requested while another one is in flight."""

    pass


class NoImageInResponseError(InfocanvasError):
    """Raised when the model answered but returned no inline image."""

    def __init__(self, message: str, response: str = "") -> None:
        """
        Initialize no-image error.

        Args:
            message: Error message
            response: Textual dump of the model response (if available)
        """
        self.response = response
        super().__init__(message)


class TransportError(InfocanvasError):
    """Raised when the model client call fails."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        """
        Initialize transport error.

        Args:
            message: Error message
            original_error: The underlying exception that caused this error
        """
        self.original_error = original_error
        super().__init__(message)


class APIError(TransportError):
    """Raised when the model API answers with an error."""

    def __init__(self, message: str, status_code: int = 0, response: str = "") -> None:
        """
        Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code (if applicable)
            response: Raw API response (if available)
        """
        self.status_code = status_code
        self.response = response
        super().__init__(message)


class NetworkError(TransportError):
    """Raised when a network operation fails."""

    pass


class RequestTimeoutError(TransportError):
    """Raised when the model client call times out."""

    pass


class ImageProcessingError(InfocanvasError):
    """Raised when image processing fails."""

    def __init__(self, message: str, image_path: str = "") -> None:
        """
        Initialize image processing error.

        Args:
            message: Error message
            image_path: Path to the image that caused the error
        """
        self.image_path = image_path
        super().__init__(message)
