"""Exceptions raised by meterform."""


class MeterFormError(Exception):
    """Base exception for meterform."""


class PermissionDeniedError(MeterFormError):
    """A device capability (camera, location) was not granted."""


class SubmissionValidationError(MeterFormError):
    """A session is not ready to be submitted."""


class IncompleteSessionError(SubmissionValidationError):
    """The operator has not confirmed that all meters were captured."""


class MissingSignatureError(SubmissionValidationError):
    """No signature was captured for the session."""


class DeliveryFailedError(MeterFormError):
    """Remote delivery failed; the session was saved locally."""


class FormatterError(MeterFormError):
    """Base exception for the remote formatting endpoint."""


class FormatterConnectionError(FormatterError):
    """The formatting endpoint could not be reached."""


class FormatterDataError(FormatterError):
    """The formatting endpoint returned an unusable response."""


class CaptureError(MeterFormError):
    """A capture device produced no usable result."""
