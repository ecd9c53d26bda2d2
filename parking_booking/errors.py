from enum import Enum


class ErrorKind(str, Enum):
    not_found = "not_found"
    invalid_state = "invalid_state"
    invalid_input = "invalid_input"
    store_failure = "store_failure"


class ParkingError(Exception):
    kind = ErrorKind.store_failure

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ParkingError):
    kind = ErrorKind.not_found


class InvalidStateError(ParkingError):
    kind = ErrorKind.invalid_state


class InvalidInputError(ParkingError):
    kind = ErrorKind.invalid_input


class StoreFailureError(ParkingError):
    kind = ErrorKind.store_failure
