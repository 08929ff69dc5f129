"""
Custom exception classes for the rentfleet engine.

Every failure the engine can surface has its own type so callers (the JSON
API, the demo script, tests) can catch precisely what they expect. `error`
is a short machine-readable kind used in API responses.
"""


class RentalError(Exception):
    """Base class for all rental engine failures."""

    error = "RentalError"

    def __init__(self, message: str = "Error: rental operation failed") -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message


class VehicleNotFoundError(RentalError):
    """Raised when a vehicle ID cannot be found in the fleet."""

    error = "NotFound"

    def __init__(self, message: str = "Error: vehicle not found") -> None:
        super().__init__(message)


class VehicleUnavailableError(RentalError):
    """Raised when renting a vehicle that is already rented."""

    error = "AlreadyRented"

    def __init__(self, message: str = "Error: vehicle is not available") -> None:
        super().__init__(message)


class OverloadError(RentalError):
    """Raised when the requested truck load exceeds its maximum."""

    error = "Overload"

    def __init__(self, message: str = "Error: requested load exceeds maximum") -> None:
        super().__init__(message)


class BatteryLowError(RentalError):
    """Raised when an electric vehicle is too low on charge to start."""

    error = "BatteryLow"

    def __init__(self, message: str = "Error: battery too low to start vehicle") -> None:
        super().__init__(message)


class VehicleNotRentedError(RentalError):
    """Raised when returning a vehicle that has no active rental."""

    error = "NotRented"

    def __init__(self, message: str = "Error: vehicle is not rented") -> None:
        super().__init__(message)


class RenterMismatchError(RentalError):
    """Raised when someone other than the active renter returns a vehicle."""

    error = "RenterMismatch"

    def __init__(self, message: str = "Error: renter does not match rental") -> None:
        super().__init__(message)


class SevereDamageError(RentalError):
    """
    Raised when a returned vehicle is judged severely damaged.

    Unlike every other failure, the vehicle has already been freed and its
    rental record removed when this is raised.
    """

    error = "SevereDamage"

    def __init__(self, message: str = "Error: severe damage reported on return") -> None:
        super().__init__(message)


class NotElectricError(RentalError):
    """Raised when charging a vehicle that is not electric."""

    error = "NotElectric"

    def __init__(self, message: str = "Error: vehicle is not electric") -> None:
        super().__init__(message)


class InvalidRequestError(RentalError):
    """Raised by the API layer when a request payload is missing fields or malformed."""

    error = "InvalidRequest"

    def __init__(self, message: str = "Error: invalid request") -> None:
        super().__init__(message)


class LogSinkUnavailableError(Exception):
    """Raised when the rental log file cannot be opened. Fatal at startup."""

    def __init__(self, message: str = "Error: cannot open log file") -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message
