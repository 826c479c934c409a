class TerrorZoneError(Exception):
    pass


class TerrorZoneFetchError(TerrorZoneError):
    pass


class MalformedDataError(TerrorZoneError):
    pass


class AreaNotFoundError(TerrorZoneError):
    pass
