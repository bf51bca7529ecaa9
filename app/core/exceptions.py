# app/core/exceptions.py

"""
Hierarquia de erros da aplicação.

Os serviços e CRUDs levantam estas exceções; os handlers registrados em
`app.main` convertem cada uma em uma resposta JSON `{"error": "..."}`
com o status HTTP correspondente.
"""

from typing import Any, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Erro base. Todas as exceções de domínio herdam desta classe."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Erro interno do servidor"

    def __init__(self, message: Optional[str] = None, *, details: Optional[Any] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    """Entrada malformada, ausente ou fora do intervalo permitido."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Dados inválidos"


class InvalidCredentialsError(AppError):
    """Falha de login. A mensagem é a mesma para email inexistente e senha errada."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Email ou senha inválidos"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token inválido ou expirado"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Você não tem permissão para acessar este recurso"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Recurso não encontrado"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Registro duplicado"


class UploadError(AppError):
    """Falha no provedor externo de armazenamento de imagens."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Falha ao enviar a imagem"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)
