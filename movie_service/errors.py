from fastapi import Request
from fastapi.responses import JSONResponse


class MovieServiceError(Exception):
    """Raised by handlers, rendered as ``{"message": ..., **extra}``."""

    def __init__(self, status_code: int, message: str, **extra):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.extra = extra

    def to_body(self) -> dict:
        return {"message": self.message, **self.extra}


async def movie_service_error_handler(request: Request, exc: MovieServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())
