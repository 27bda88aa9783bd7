# Routes answer ValidationError with 400 and StorageError with a generic 500.


class ValidationError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidURL(ValidationError):
    def __init__(self, message: str = "Invalid URL") -> None:
        super().__init__(message)


class UnsupportedScheme(ValidationError):
    def __init__(self, scheme: str) -> None:
        self.scheme = scheme
        super().__init__("Unsupported URL scheme")


class StorageError(Exception):
    pass
