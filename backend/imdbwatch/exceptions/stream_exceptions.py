from fastapi import status

from .base import AppError


class InvalidStreamMessage(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, reason: str):
        super().__init__(f"Invalid stream message: {reason}")
