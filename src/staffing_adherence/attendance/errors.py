"""Errors that abort a whole adherence run."""


class AdherenceRunError(RuntimeError):
    """A store or transport failure; no partial month is produced."""


class MissingForecastTotalError(AdherenceRunError):
    """The region has no annual forecast volume."""

    def __init__(self, region: str):
        super().__init__(f"No forecast total configured for region {region!r}")
        self.region = region
