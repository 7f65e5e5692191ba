# apps/core/middleware.py

import logging

from django.db import DatabaseError

from .exceptions import TaskProError
from .utils import api_error

logger = logging.getLogger(__name__)


class ApiErrorMiddleware:
    """
    Middleware que converte exceções em envelopes JSON

    Cada TaskProError carrega o próprio status; falha de banco vira
    UpstreamError (500) e qualquer outra exceção é logada com traceback.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if isinstance(exception, TaskProError):
            if exception.status_code >= 500:
                logger.error("%s %s -> %s", request.method, request.path, exception.message)
            return api_error(exception.message, exception.status_code)

        if isinstance(exception, DatabaseError):
            logger.error("Erro de banco em %s %s", request.method, request.path, exc_info=exception)
            return api_error('Database unavailable', 500)

        logger.error("Erro inesperado em %s %s", request.method, request.path, exc_info=exception)
        return api_error('Server error', 500)
