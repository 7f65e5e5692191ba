# apps/core/utils.py

import json
from typing import Dict, Tuple

from django.http import JsonResponse

from .exceptions import ValidationError


def api_response(data=None, code: int = 200) -> JsonResponse:
    """Envelope de sucesso: {status, code, data}"""
    return JsonResponse(
        {'status': 'success', 'code': code, 'data': data},
        status=code,
        safe=False
    )


def api_error(message: str, code: int) -> JsonResponse:
    """Envelope de erro: {status, code, error}"""
    return JsonResponse(
        {'status': 'error', 'code': code, 'error': message},
        status=code
    )


def read_json_body(request) -> Dict:
    """
    Lê o corpo JSON da requisição

    Corpo vazio vale como {}; qualquer coisa que não seja um objeto
    JSON é rejeitada.
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError('Malformed JSON body')

    if not isinstance(data, dict):
        raise ValidationError('JSON body must be an object')
    return data


def read_form_body(request) -> Tuple[Dict, Dict]:
    """
    Lê dados + arquivos de uma requisição JSON ou multipart

    O Django só processa multipart em POST; para PATCH o parser é
    chamado manualmente.
    """
    if request.content_type == 'multipart/form-data':
        if request.method == 'POST':
            return request.POST.dict(), request.FILES
        data, files = request.parse_file_upload(request.META, request)
        return data.dict(), files

    return read_json_body(request), {}


def bearer_token(request):
    """Extrai o token do header Authorization: Bearer <token>"""
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()
