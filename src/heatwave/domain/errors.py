"""Domain errors. NotFound is modelled as None, not as an exception."""


class HeatwaveError(Exception):
    """Base class for heatwave failures."""


class InvalidInterval(HeatwaveError, ValueError):
    """A wavelength that is not a positive integer number of seconds."""

    def __init__(self, wavelength: object) -> None:
        super().__init__(f"Wavelength must be a positive number of seconds, got {wavelength!r}.")
        self.wavelength = wavelength


class DuplicateWaveName(HeatwaveError, ValueError):
    """Another wave already uses this name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"A wave named {name!r} already exists.")
        self.name = name


class TransactionFailure(HeatwaveError):
    """A multi-step store mutation could not complete and was rolled back."""


class ExternalSourceUnavailable(HeatwaveError):
    """The contact directory or call history could not be read."""

    def __init__(self, source: str, reason: str = "") -> None:
        detail = f"{source} is unavailable"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)
        self.source = source
