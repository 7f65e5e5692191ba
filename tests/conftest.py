"""Fixtures compartilhadas dos testes do TaskPro."""

import json

import pytest
from django.test import Client

from apps.board.coordinator import HierarchyCoordinator
from apps.core.auth_service import AuthenticationService
from apps.core.models import User


@pytest.fixture
def make_user(db):
    def _make_user(email='ana@example.com', password='s3nha-forte', name='Ana', verified=True):
        return User.objects.create_user(
            email=email,
            password=password,
            name=name,
            is_verified=verified,
            verification_token=None if verified else f'token-{email}',
        )
    return _make_user


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def other_user(make_user):
    return make_user(email='bruno@example.com', name='Bruno')


@pytest.fixture
def service():
    return AuthenticationService()


@pytest.fixture
def hierarchy():
    return HierarchyCoordinator()


@pytest.fixture
def token(user, service):
    return service.authenticate('ana@example.com', 's3nha-forte').token


class ApiClient(Client):
    """Client do Django que fala JSON e manda o token Bearer"""

    def __init__(self, token=None, **kwargs):
        super().__init__(**kwargs)
        self.token = token

    def _headers(self, headers):
        headers = dict(headers or {})
        if self.token:
            headers.setdefault('Authorization', f'Bearer {self.token}')
        return headers

    def get(self, path, data=None, headers=None, **extra):
        return super().get(path, data=data, headers=self._headers(headers), **extra)

    def send(self, method, path, data=None, headers=None):
        body = json.dumps(data) if data is not None else ''
        handler = getattr(super(), method)
        return handler(path, data=body, content_type='application/json', headers=self._headers(headers))


@pytest.fixture
def api(db):
    return ApiClient()


@pytest.fixture
def auth_api(token):
    return ApiClient(token=token)
