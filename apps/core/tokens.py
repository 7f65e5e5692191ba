# apps/core/tokens.py

"""
Tokens de sessão assinados

O token é stateless: leva o id do usuário e um id de sessão aleatório,
assinado com django.core.signing. O logout coloca o id de sessão numa
lista de revogação guardada no cache até o token expirar sozinho.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta

from django.conf import settings
from django.core import signing
from django.core.cache import cache
from django.utils import timezone

from .exceptions import AuthError, TokenExpiredError

logger = logging.getLogger(__name__)


@dataclass
class IssuedToken:
    token: str
    session_id: str
    expires_at: datetime


@dataclass
class TokenClaims:
    user_id: int
    session_id: str
    issued_at: float


class SessionTokenService:
    """Emite, valida e revoga tokens de sessão"""

    salt = 'taskpro.session'
    revocation_prefix = 'taskpro:revoked:'

    def __init__(self, ttl_seconds: int = None, cache_backend=None):
        self._ttl = ttl_seconds or settings.TASKPRO_TOKEN_TTL
        self._cache = cache_backend or cache

    @property
    def ttl(self) -> int:
        return self._ttl

    def issue(self, user) -> IssuedToken:
        """Gera um token novo para o usuário, válido por `ttl` segundos"""
        now = timezone.now()
        session_id = secrets.token_hex(16)
        payload = {
            'uid': user.pk,
            'sid': session_id,
            'iat': now.timestamp(),
        }
        token = signing.dumps(payload, salt=self.salt, compress=True)
        return IssuedToken(
            token=token,
            session_id=session_id,
            expires_at=now + timedelta(seconds=self._ttl),
        )

    def verify(self, token: str) -> TokenClaims:
        """
        Valida assinatura, expiração e revogação

        Raises:
            TokenExpiredError: token assinado corretamente porém vencido
            AuthError: token ausente, adulterado ou revogado
        """
        if not token:
            raise AuthError('Not authorized')

        try:
            payload = signing.loads(token, salt=self.salt, max_age=self._ttl)
        except signing.SignatureExpired:
            raise TokenExpiredError('Token expired')
        except signing.BadSignature:
            raise AuthError('Invalid token')

        try:
            claims = TokenClaims(
                user_id=payload['uid'],
                session_id=payload['sid'],
                issued_at=payload['iat'],
            )
        except (KeyError, TypeError):
            raise AuthError('Invalid token')

        if self._cache.get(self._revocation_key(claims.session_id)):
            raise AuthError('Token has been revoked')

        return claims

    def revoke(self, token: str) -> TokenClaims:
        """Revoga o token até o fim da sua validade natural"""
        claims = self.verify(token)

        elapsed = timezone.now().timestamp() - claims.issued_at
        remaining = max(int(self._ttl - elapsed), 1)
        self._cache.set(self._revocation_key(claims.session_id), True, timeout=remaining)

        logger.info("Sessão %s revogada para usuário %s", claims.session_id[:8], claims.user_id)
        return claims

    def _revocation_key(self, session_id: str) -> str:
        return f"{self.revocation_prefix}{session_id}"
