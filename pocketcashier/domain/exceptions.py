# pocketcashier/domain/exceptions.py


class ShopError(Exception):
    """Base for errors reported to the caller as ``{"error": message}``."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ShopError):
    """Missing or malformed input. Nothing has been written yet."""

    status_code = 400


class NotFoundError(ShopError):
    status_code = 404


class ConfigError(ShopError):
    """Missing provider credential or misconfigured business."""

    status_code = 500


class UpstreamError(ShopError):
    """Payment provider or store call failed; message surfaced verbatim."""

    status_code = 500
