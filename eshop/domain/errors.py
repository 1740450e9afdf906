# eshop/domain/errors.py


class ServiceError(Exception):
    """
    Base for failures the API reports to the client.
    Extra keyword details are echoed next to the message.
    """

    status_code = 500

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        return {"error": self.message, **self.details}


class InvalidInputError(ServiceError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class InvalidStateError(ServiceError):
    status_code = 400


class InsufficientStockError(ServiceError):
    status_code = 400

    def __init__(self, available: int, requested: int):
        super().__init__(
            "Insufficient stock available",
            available=available,
            requested=requested,
        )
        self.available = available
        self.requested = requested


class CatalogUnavailableError(ServiceError):
    status_code = 500
