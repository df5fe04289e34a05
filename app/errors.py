# app/errors.py

# Error kinds raised by the store logic. main.py turns them into
# {"error": message} responses with the matching status code.


class StoreError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    status_code = 400


class NotFound(StoreError):
    status_code = 404


class PersistenceError(StoreError):
    status_code = 500
