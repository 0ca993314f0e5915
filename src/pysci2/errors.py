from __future__ import annotations


class Sci2Error(Exception):
    """Base class for Sci2 hit reconstruction errors."""

    pass


class ConfigurationMissing(Sci2Error):
    """Fatal error thrown when calibration parameters are not available.

    Reconstruction has no fallback calibration, so this halts production.
    """

    pass


class InputUnavailable(Sci2Error):
    """Fatal error thrown when the per-event input collection cannot be
    obtained.

    Attributes
    ----------
    table: str
        name of the input table. This will be set after the exception is
        caught, and appended to the error message
    file: str
        name of the input file. This will be set after the exception is
        caught, and appended to the error message
    """

    def __init__(self, *args) -> None:
        super().__init__(*args)
        self.table = None
        self.file = None

    def __str__(self) -> str:
        suffix = ""
        if self.table:
            suffix += "\nInput table: " + str(self.table)
        if self.file:
            suffix += "\nInput file: " + str(self.file)
        return super().__str__() + suffix
