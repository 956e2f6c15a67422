class AstroError(Exception):
    """Base error."""

class InvalidBodyError(AstroError):
    """Raised when a body is not supported by the requested operation."""

class EarthNotAllowedError(AstroError):
    """Raised when an Earth-relative quantity is requested for the Earth itself."""

class InvalidParameterError(AstroError):
    """Raised when a mode parameter is outside its valid set."""

class BadVectorError(AstroError):
    """Raised for a degenerate (near-zero length) vector."""

class BadTimeError(AstroError):
    """Raised when a time lies outside a model's valid range."""

class NoConvergeError(AstroError):
    """Raised when an iterative solver exceeds its iteration budget."""

class SearchFailureError(AstroError):
    """Raised when a required event is not found in its search window."""

class InternalError(AstroError):
    """Raised when an assumption of a bracketing algorithm does not hold."""

class NoMoonQuarterError(SearchFailureError):
    """Raised when no lunar quarter can be found in the allowed window."""

class WrongMoonQuarterError(InternalError):
    """Raised when consecutive quarter searches do not advance by one quarter."""
