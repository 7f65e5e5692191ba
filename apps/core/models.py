# apps/core/models.py

from django.conf import settings
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


def default_avatar_url():
    return settings.TASKPRO_DEFAULT_AVATAR


class UserManager(BaseUserManager):
    """Manager para usuários identificados por email (sem username)"""

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        # Superusuário criado pelo shell não passa pela verificação de email
        extra_fields.setdefault('is_verified', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """
    Conta do TaskPro

    Identificada pelo email. Nasce sem verificação, com um token de
    verificação que é limpo quando o link do email é aberto.
    """

    username = None
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150)
    avatar = models.URLField(max_length=500, default=default_avatar_url)

    # === VERIFICAÇÃO DE EMAIL ===
    is_verified = models.BooleanField(default=False)
    verification_token = models.CharField(
        max_length=64,
        null=True,
        blank=True,
        unique=True,
        help_text="Existe apenas enquanto o email não foi verificado"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    objects = UserManager()

    class Meta:
        db_table = 'account'
        ordering = ['email']

    def identity(self):
        """Visão pública da conta - nunca inclui credenciais"""
        return {
            'email': self.email,
            'name': self.name,
            'avatar': self.avatar,
        }

    @property
    def has_pending_verification(self):
        return bool(self.verification_token)

    def __str__(self):
        return f"{self.name} <{self.email}>"


class BackgroundImage(models.Model):
    """Imagem de fundo disponível para os boards"""

    name = models.CharField(max_length=100)
    img_url = models.URLField(max_length=500)

    class Meta:
        db_table = 'background_image'
        ordering = ['name']

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'imgURL': self.img_url}

    def __str__(self):
        return self.name
