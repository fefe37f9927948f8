"""
Tradutor de erros: único ponto onde falhas viram respostas HTTP
Corpo uniforme: {"error": <tipo>, "message": <texto>}
"""

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from services.errors import CatalogError, InternalError, ValidationError

log = logging.getLogger(__name__)

def error_body(exc: CatalogError) -> dict:
    return {"error": exc.kind, "message": exc.message}

async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc))

async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # corpo que nem chega a ser JSON válido
    err = ValidationError("Invalid product data")
    return JSONResponse(status_code=err.status_code, content=error_body(err))

async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Erro não tratado em %s %s", request.method, request.url.path)
    err = InternalError()
    return JSONResponse(status_code=err.status_code, content=error_body(err))

def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
