from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class ValidationError(DomainError):
    """Entrada ausente ou malformada."""


class InvalidOldPasswordError(ValidationError):
    """Senha atual informada nao confere."""


class ConflictError(DomainError):
    """Username ou email ja cadastrado."""


class NotFoundError(DomainError):
    """Usuario ou canal inexistente."""


class AuthenticationError(DomainError):
    """Base para falhas de autenticacao."""


class InvalidCredentialsError(AuthenticationError):
    pass


class UnauthorizedError(AuthenticationError):
    pass


class InvalidTokenError(AuthenticationError):
    pass


class TokenReuseError(AuthenticationError):
    """Refresh token ja substituido por uma rotacao posterior."""


class UploadFailedError(DomainError):
    """Servico de midia nao devolveu URL."""


class UnavailableError(DomainError):
    """Dependencia externa indisponivel ou timeout."""


class InternalError(DomainError):
    """Invariante violada."""
