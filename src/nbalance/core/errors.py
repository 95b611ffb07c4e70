"""Typed errors raised by the nitrogen balance calculators.

Every error carries a machine-readable ``code`` and a ``context`` dict so
callers can translate failures without parsing messages.
"""


class NitrogenBalanceError(Exception):
    """Base class for all calculation errors."""

    code = "nitrogen_balance_error"

    def __init__(self, message: str, code: str | None = None, **context):
        self.context = context
        if code is not None:
            self.code = code
        super().__init__(message)


class MissingReferenceError(NitrogenBalanceError):
    """A record refers to a catalogue entry or cultivation that does not exist."""

    code = "missing_reference"


class MissingSoilParameterError(NitrogenBalanceError):
    """A formula needs a soil parameter that the soil analyses do not provide."""

    code = "missing_soil_parameter"

    def __init__(self, parameter: str, message: str | None = None):
        super().__init__(
            message or f"No {parameter} value found in soil analysis",
            parameter=parameter,
        )


class UnknownClassificationError(NitrogenBalanceError):
    """A lookup key (method, soil type, groundwater class, land cover) is not in its table."""

    code = "unknown_classification"


class RasterSourceError(NitrogenBalanceError):
    """The deposition raster could not be fetched or parsed."""

    code = "raster_unavailable"


class InputCollectionError(NitrogenBalanceError):
    """The data-access collaborator failed while collecting balance input."""

    code = "input_collection_failed"
