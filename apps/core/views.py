# apps/core/views.py

import logging

from django.core.cache import cache
from django.db import connection
from django.http import HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from .auth_service import auth_service
from .exceptions import AuthError
from .forms import LoginForm, ProfileForm, ResendVerificationForm, SignupForm, validate_payload
from .models import BackgroundImage
from .permissions import token_required
from .utils import api_error, api_response, bearer_token, read_form_body, read_json_body

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["POST"])
def signup_view(request):
    """
    Cadastro de conta

    Toda validação e criação fica no serviço encapsulado; a view só
    traduz HTTP <-> serviço.
    """
    data = validate_payload(SignupForm, read_json_body(request))

    usuario = auth_service.register(
        email=data.get('email'),
        password=data.get('password'),
        name=data.get('name'),
    )

    return api_response({'user': {'email': usuario.email, 'name': usuario.name}}, code=201)


@csrf_exempt
@require_http_methods(["POST"])
def login_view(request):
    data = validate_payload(LoginForm, read_json_body(request))

    resultado = auth_service.authenticate(data.get('email'), data.get('password'))

    return api_response({
        'token': resultado.token,
        'expiresAt': resultado.expires_at.isoformat(),
        'user': resultado.user.identity(),
    })


@csrf_exempt
@require_http_methods(["GET", "POST"])
def logout_view(request):
    token = bearer_token(request)
    if token is None:
        raise AuthError('Not authorized')

    auth_service.end_session(token)
    return HttpResponse(status=204)


@require_http_methods(["GET"])
def verify_email_view(request, verification_token):
    auth_service.verify_email(verification_token)
    return api_response({'message': 'Verification successful'})


@csrf_exempt
@require_http_methods(["POST"])
def resend_verification_view(request):
    data = validate_payload(ResendVerificationForm, read_json_body(request))

    auth_service.resend_verification(data.get('email'))
    return api_response({'message': 'Verification email sent'})


@require_http_methods(["GET"])
@token_required
def current_user_view(request):
    return api_response(request.account.identity())


@csrf_exempt
@require_http_methods(["PATCH", "POST"])
@token_required
def update_user_view(request):
    """
    Atualização parcial do perfil

    Aceita JSON ou multipart; o arquivo de avatar vem na chave 'avatar'.
    """
    data, files = read_form_body(request)

    changes = validate_payload(ProfileForm, data, partial=True)
    if 'avatar' in files:
        changes['avatar'] = files['avatar']

    usuario = auth_service.update_profile(request.session_token, changes)
    return api_response({'user': usuario.identity()})


@require_http_methods(["GET"])
def background_images_view(request):
    imagens = [imagem.to_dict() for imagem in BackgroundImage.objects.all()]
    return api_response(imagens)


def health_check(request):
    """
    Health check para monitoramento
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        cache.set('taskpro:health', 'ok', timeout=5)

        return api_response({
            'database': 'ok',
            'cache': 'ok' if cache.get('taskpro:health') == 'ok' else 'degraded',
        })
    except Exception as e:
        logger.error("Health check falhou: %s", e)
        return api_error('Service unavailable', 503)


def not_found_view(request, exception=None):
    return api_error('Not found', 404)


def server_error_view(request):
    return api_error('Server error', 500)
