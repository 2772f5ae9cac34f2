"""Domain errors raised by the services and converted to JSON bodies by the routers."""


class StoreUnavailableError(RuntimeError):
    """Raised when a request arrives before the record store is ready"""


class InvalidRecordIdError(ValueError):
    """Raised when an id cannot be parsed into the store's id format"""


class MissingFieldsError(ValueError):
    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(f"Missing fields: {', '.join(self.fields)}")


class InvalidAmountError(ValueError):
    pass


class ApplicantNotFoundError(LookupError):
    pass


class PassIdExhaustedError(RuntimeError):
    """Raised when every generated pass id collided with an existing one"""
