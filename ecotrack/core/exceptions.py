"""
Domain errors raised by the EcoTrack services.

Every error carries the HTTP status it maps to; ``ecotrack.main`` renders them
as ``{"message": ...}`` responses.
"""


class EcoTrackError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# --- Emission calculation ---

class EmissionCalculationError(EcoTrackError):
    """Base class for every failure of the emission calculation engine."""
    status_code = 400


class InvalidInput(EmissionCalculationError):
    pass


class MissingVehicle(EmissionCalculationError):
    pass


class VehicleNotFound(EmissionCalculationError):
    pass


class IncompleteVehicleData(EmissionCalculationError):
    pass


class FactorNotFound(EmissionCalculationError):
    pass


class UnsupportedMode(EmissionCalculationError):
    pass


# --- Record ownership ---

class NotFound(EcoTrackError):
    status_code = 404


class Forbidden(EcoTrackError):
    status_code = 403


class DualWriteError(EcoTrackError):
    """Trip and travel detail could not be written together; neither was kept."""
    status_code = 500
