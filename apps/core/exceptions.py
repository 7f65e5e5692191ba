# apps/core/exceptions.py

"""
Taxonomia de erros do TaskPro

Os serviços lançam estes tipos; o ApiErrorMiddleware converte cada um
no envelope JSON com o status HTTP declarado na própria classe.
"""


class TaskProError(Exception):
    """Base de todos os erros lançados de propósito pelo core"""

    status_code = 500
    default_message = 'Server error'

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskProError):
    """Entrada ausente ou malformada"""

    status_code = 400
    default_message = 'Invalid data'


class AuthError(TaskProError):
    """Credenciais erradas, token ausente/inválido ou conta não verificada"""

    status_code = 401
    default_message = 'Not authorized'


class TokenExpiredError(AuthError):
    default_message = 'Token expired'


class NotFoundError(TaskProError):
    status_code = 404
    default_message = 'Not found'


class ConflictError(TaskProError):
    """Violação de unicidade (email, nome de board, nome de coluna)"""

    status_code = 409
    default_message = 'Name already in use'


class AlreadyVerifiedError(TaskProError):
    status_code = 400
    default_message = 'Verification has already been passed'


class UpstreamError(TaskProError):
    """Falha do banco, do servidor de email ou do storage de arquivos"""

    status_code = 500
    default_message = 'Upstream service failure'
