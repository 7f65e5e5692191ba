# apps/core/auth_service.py

"""
Serviço de Autenticação - Encapsula toda lógica de identidade do TaskPro
Cadastro, verificação de email, login/logout por token e perfil
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction
from django.utils import timezone

from .exceptions import (
    AlreadyVerifiedError,
    AuthError,
    ConflictError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from .mailer import VerificationMailer
from .models import User
from .storage import AvatarStorage
from .tokens import SessionTokenService

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    user: User
    token: str
    expires_at: datetime


class AuthenticationService:
    """
    Serviço encapsulado para gerenciar identidade

    Os colaboradores externos (tokens, email, storage de avatar) são
    injetados no construtor; sem argumentos usa as implementações
    configuradas em settings.
    """

    def __init__(self, tokens: SessionTokenService = None,
                 mailer: VerificationMailer = None,
                 avatars: AvatarStorage = None):
        self._tokens = tokens or SessionTokenService()
        self._mailer = mailer or VerificationMailer()
        self._avatars = avatars or AvatarStorage()

    def register(self, email: str, password: str, name: str) -> User:
        """
        Cria uma conta não verificada e envia o email de verificação

        Returns:
            Usuário criado
        """
        email = self._validar_campos_cadastro(email, password, name)

        if User.objects.filter(email=email).exists():
            raise ConflictError('Email already in use')

        self._validar_senha(password, User(email=email, name=name.strip()))

        try:
            with transaction.atomic():
                usuario = User.objects.create_user(
                    email=email,
                    password=password,
                    name=name.strip(),
                    verification_token=self._gerar_token_verificacao(),
                )
        except IntegrityError:
            # Cadastro concorrente com o mesmo email
            raise ConflictError('Email already in use')

        logger.info("Conta criada para %s", usuario.email)

        try:
            self._mailer.send_verification(usuario)
        except UpstreamError:
            # A conta fica criada; o usuário pode pedir reenvio
            logger.warning("Conta %s criada sem email de verificação", usuario.email)

        return usuario

    def authenticate(self, email: str, password: str) -> LoginResult:
        """Valida credenciais e emite um token de sessão"""
        if not email or not password:
            raise ValidationError('Missing email or password')

        usuario = User.objects.filter(email=self._normalizar_email(email)).first()

        if usuario is None or not usuario.check_password(password):
            logger.info("Tentativa de login falhada para %s", email)
            raise AuthError('Wrong email or password')

        if not usuario.is_verified:
            raise AuthError('Before login you have to verify your email address')

        issued = self._tokens.issue(usuario)
        self._atualizar_ultimo_acesso(usuario)

        logger.info("Login de %s", usuario.email)
        return LoginResult(user=usuario, token=issued.token, expires_at=issued.expires_at)

    def end_session(self, token: Optional[str]) -> None:
        """Revoga o token de sessão atual"""
        claims = self._tokens.revoke(token)
        logger.info("Logout do usuário %s", claims.user_id)

    def current_identity(self, token: Optional[str]) -> User:
        """Resolve o usuário dono do token"""
        claims = self._tokens.verify(token)

        try:
            return User.objects.get(pk=claims.user_id, is_active=True)
        except User.DoesNotExist:
            raise NotFoundError('User not found')

    def verify_email(self, verification_token: str) -> User:
        """Marca a conta como verificada e descarta o token"""
        if not verification_token:
            raise NotFoundError('User not found')

        with transaction.atomic():
            usuario = (
                User.objects.select_for_update()
                .filter(verification_token=verification_token)
                .first()
            )
            if usuario is None:
                raise NotFoundError('User not found')

            usuario.is_verified = True
            usuario.verification_token = None
            usuario.save(update_fields=['is_verified', 'verification_token', 'updated_at'])

        logger.info("Email verificado: %s", usuario.email)
        return usuario

    def resend_verification(self, email: str) -> None:
        """Reenvia o email de verificação com o token já existente"""
        if not email:
            raise ValidationError('Missing email')

        usuario = User.objects.filter(email=self._normalizar_email(email)).first()
        if usuario is None:
            raise NotFoundError('User not found')

        if not usuario.has_pending_verification:
            raise AlreadyVerifiedError('Verification has already been passed')

        self._mailer.send_verification(usuario)

    def update_profile(self, token: Optional[str], changes: Dict) -> User:
        """
        Atualiza apenas os campos informados

        Args:
            token: token de sessão
            changes: dict com name, email, password e/ou avatar (arquivo)
        """
        usuario = self.current_identity(token)
        campos = []

        name = changes.get('name')
        if name:
            usuario.name = name.strip()
            campos.append('name')

        email = changes.get('email')
        if email:
            email = self._validar_email(email)
            if email != usuario.email:
                if User.objects.filter(email=email).exclude(pk=usuario.pk).exists():
                    raise ConflictError('Email already in use')
                usuario.email = email
                campos.append('email')

        password = changes.get('password')
        if password:
            self._validar_senha(password, usuario)
            usuario.set_password(password)
            campos.append('password')

        avatar = changes.get('avatar')
        if avatar is not None:
            usuario.avatar = self._avatars.upload(usuario, avatar)
            campos.append('avatar')

        if campos:
            try:
                usuario.save(update_fields=campos + ['updated_at'])
            except IntegrityError:
                raise ConflictError('Email already in use')
            logger.info("Perfil de %s atualizado: %s", usuario.pk, ', '.join(campos))

        return usuario

    # =================== MÉTODOS PRIVADOS (ENCAPSULADOS) ===================

    def _validar_campos_cadastro(self, email, password, name) -> str:
        """Valida dados de cadastro e devolve o email normalizado"""
        if not email or not password or not name or not str(name).strip():
            raise ValidationError('Missing required fields')
        return self._validar_email(email)

    def _validar_email(self, email: str) -> str:
        email = self._normalizar_email(email)
        try:
            validate_email(email)
        except DjangoValidationError:
            raise ValidationError('Invalid email address')
        return email

    def _validar_senha(self, password: str, usuario: User):
        """Aplica os AUTH_PASSWORD_VALIDATORS configurados em settings"""
        try:
            validate_password(password, user=usuario)
        except DjangoValidationError as e:
            raise ValidationError(' '.join(e.messages))

    def _normalizar_email(self, email: str) -> str:
        return str(email).strip().lower()

    def _gerar_token_verificacao(self) -> str:
        return secrets.token_urlsafe(16)

    def _atualizar_ultimo_acesso(self, usuario: User):
        usuario.last_login = timezone.now()
        usuario.save(update_fields=['last_login'])


# Instância global do serviço, montada com os colaboradores de settings
auth_service = AuthenticationService()
