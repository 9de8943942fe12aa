"""
Exception hierarchy for the BloomSphere client.
"""
from typing import Optional


class BloomSphereError(Exception):
    """Base class for all errors raised by this package."""


class InputError(BloomSphereError):
    """Local validation failed; the triggering action is blocked."""


class FileValidationError(InputError):
    """The selected file is missing, too large or of a disallowed type."""


class WorkflowError(InputError):
    """A workflow action was invoked while its preconditions do not hold."""


class GenerationInProgressError(BloomSphereError):
    """A request was started while another one is still outstanding."""


class ServiceError(BloomSphereError):
    """The remote service failed or could not be reached."""

    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
