"""Error types raised while generating a QR code.

Every error carries a message that is safe to hand back to the caller; the
HTTP layer reports all of them the same way.
"""


class QRApiError(Exception):
    """Base class for failures surfaced to API callers."""


class ValidationError(QRApiError):
    """The request options are unusable. Raised before any browser work."""


class NavigationTimeoutError(QRApiError):
    """The target application did not load or become ready in time."""


class MissingArtifactError(QRApiError):
    """The rendered QR code could not be located on the page or on disk."""


class SessionLaunchError(QRApiError):
    """The shared browser could not be started."""
