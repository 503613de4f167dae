"""Precondition failures raised before any carving work starts."""


class SeamCarvingError(ValueError):
    """Base class for seam carving precondition failures."""


class ImageTooSmallError(SeamCarvingError):
    """Raised when either image dimension is below 2."""


class TooManySeamsError(SeamCarvingError):
    """Raised when the width change exceeds half of the input width."""
