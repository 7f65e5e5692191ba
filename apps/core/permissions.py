# apps/core/permissions.py

from functools import wraps

from .exceptions import AuthError
from .utils import bearer_token


def token_required(view_func):
    """
    Decorador que exige token de sessão válido

    Injeta request.account (usuário) e request.session_token para a view.
    Os erros sobem como AuthError/NotFoundError e viram JSON no middleware.
    """

    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        from .auth_service import auth_service

        token = bearer_token(request)
        if token is None:
            raise AuthError('Not authorized')

        request.account = auth_service.current_identity(token)
        request.session_token = token
        return view_func(request, *args, **kwargs)

    return wrapped_view
