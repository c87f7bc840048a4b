class RolodexError(Exception):
    """Base class for errors raised by the recipe rolodex."""


class StoreUnavailable(RolodexError):
    """The remote recipe store could not complete a request.

    Covers network failures, permission failures and malformed responses
    alike. The underlying exception, when there is one, is chained as
    ``__cause__``.
    """


class EmptyCatalogError(RolodexError, ValueError):
    """Raised when picking a random recipe from an empty catalog."""


__all__ = ["EmptyCatalogError", "RolodexError", "StoreUnavailable"]
