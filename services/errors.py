"""
Conjunto fechado de erros do catálogo.

Cada tipo carrega o status HTTP associado; o nome da classe é exposto como
`error` no corpo da resposta (ver api/errors.py).
"""


class CatalogError(Exception):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__


class ValidationError(CatalogError):
    status_code = 400


class NotFoundError(CatalogError):
    status_code = 404


class InternalError(CatalogError):
    status_code = 500
