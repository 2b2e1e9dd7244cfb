"""Errors raised by the MRT station service."""


class UpstreamError(RuntimeError):
    """The MRT website endpoint could not be fetched or its payload could not be decoded."""


class InvalidTimeFormat(ValueError):
    def __init__(self, value: str):
        super().__init__(f"Invalid time format: {value}")
        self.value = value


class StationNotFound(LookupError):
    def __init__(self, station_id: str):
        super().__init__(f"Station not found: {station_id}")
        self.station_id = station_id
