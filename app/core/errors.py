"""
Error taxonomy for FACEIT lookups and the handlers that render it.

Every failure is answered with HTTP 200 and a human readable sentence as the
body. Nightbot and StreamElements only show the body of a 200 response to
viewers, so a 4xx/5xx would surface as a bare "error" in chat.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

logger = logging.getLogger("app.errors")

GENERIC_UPSTREAM_MESSAGE = "Erro ao buscar dados da FACEIT"
GENERIC_MESSAGE = "Erro ao processar requisição"
INVALID_PARAMETER_MESSAGE = "Parâmetro inválido"


class FaceitError(Exception):
    message = GENERIC_MESSAGE

    def __init__(self, detail: Optional[str] = None, message: Optional[str] = None):
        super().__init__(detail or message or self.message)
        if message:
            self.message = message
        self.detail = detail


class PlayerNotFoundError(FaceitError):
    message = "nick inválido ou não encontrado :("


class NoGameDataError(FaceitError):
    def __init__(self, game: str = "cs2", detail: Optional[str] = None):
        super().__init__(
            detail=detail,
            message=f"Jogador não possui stats no {game.upper()} :(",
        )
        self.game = game


class UpstreamUnavailableError(FaceitError):
    message = GENERIC_UPSTREAM_MESSAGE

    def __init__(self, detail: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(detail=detail)
        self.status_code = status_code


class NotFoundUpstreamError(UpstreamUnavailableError):
    """The API answered 404 for the requested resource."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail=detail, status_code=status.HTTP_404_NOT_FOUND)


class MalformedResponseError(FaceitError):
    message = GENERIC_UPSTREAM_MESSAGE


async def faceit_error_handler(request: Request, exc: FaceitError):
    if isinstance(exc, (PlayerNotFoundError, NoGameDataError)):
        logger.info("%s %s: %s", request.method, request.url.path, exc.message)
    else:
        logger.error(
            "%s %s failed: %s (%s)",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc.detail or exc.message,
        )
    return PlainTextResponse(exc.message, status_code=status.HTTP_200_OK)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("%s %s: invalid query %s", request.method, request.url.path, exc.errors())
    return PlainTextResponse(INVALID_PARAMETER_MESSAGE, status_code=status.HTTP_200_OK)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("%s %s crashed", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse(GENERIC_MESSAGE, status_code=status.HTTP_200_OK)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FaceitError, faceit_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
