class MeterDashError(Exception): ...


class IngestError(MeterDashError): ...


class SelectionError(MeterDashError): ...


class ApiError(MeterDashError): ...


def require(condition: bool, message: str, exc: type[MeterDashError] = MeterDashError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
