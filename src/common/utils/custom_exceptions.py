class HotelError(Exception):
    status_code = 500

    def __init__(self, message: str = "", status_code: int = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class InvalidRequest(HotelError):
    status_code = 400


class InvalidDates(InvalidRequest):
    pass


class Unauthorized(HotelError):
    status_code = 401


class Forbidden(HotelError):
    status_code = 403


class IncorrectCredentials(Unauthorized):
    pass


class NotFoundException(HotelError):
    status_code = 404

    def __init__(self, resource: str, identifier: str, status_code: int = 404):
        super().__init__(f"{resource} '{identifier}' not found", status_code)
        self.resource = resource
        self.identifier = identifier


class ConflictError(HotelError):
    status_code = 409


class BookingConflict(ConflictError):
    pass


class RoomAlreadyExists(ConflictError):
    pass


class StaffAlreadyExists(ConflictError):
    pass


class InvalidTransition(ConflictError):
    pass


class TransactionContended(ConflictError):
    pass
