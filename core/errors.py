"""
Error kinds raised by the camera client.

Both are terminal for the attempt that raised them and never fatal to the
running app.
"""


class CameraError(RuntimeError):
    """The capture device could not be opened or read."""


class DetectionRequestError(RuntimeError):
    """Sending a frame to the detection service failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
