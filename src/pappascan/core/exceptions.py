"""Exception classes for the Pappascan core module."""


class PappascanError(Exception):
    """Base exception for all Pappascan errors."""


class FrameError(PappascanError):
    """Raised when a frame's pixel buffer cannot be interpreted."""

    def __init__(self, shape: tuple[int, ...] | None = None, reason: str | None = None) -> None:
        msg = "Unsupported frame"
        if shape is not None:
            msg += f" with shape {shape}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.shape = shape
        self.reason = reason


class PrimitiveLibraryError(PappascanError):
    """Raised when an image-processing primitive is unavailable or fails.

    This is fatal for the analysis pipeline: once raised, the pipeline
    refuses further passes until it is reset.
    """

    def __init__(self, primitive: str | None = None, cause: BaseException | None = None) -> None:
        msg = "Image-processing primitive failed"
        if primitive:
            msg = f"Image-processing primitive {primitive!r} failed"
        if cause is not None:
            msg += f": {type(cause).__name__}: {cause}"
        super().__init__(msg)
        self.primitive = primitive
        self.cause = cause


class ImageReadError(PappascanError):
    """Raised when an image file cannot be decoded into a frame."""

    def __init__(self, path: str | None = None, reason: str | None = None) -> None:
        msg = f"Cannot read image: {path}" if path else "Cannot read image"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
        self.path = path
        self.reason = reason
