# apps/core/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from .forms import AccountChangeForm, AccountCreationForm
from .models import BackgroundImage, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin customizado para o modelo User"""

    form = AccountChangeForm
    add_form = AccountCreationForm

    list_display = [
        'email', 'name', 'verificacao_badge', 'boards_count',
        'is_active', 'date_joined'
    ]
    list_filter = ['is_verified', 'is_staff', 'is_active', 'date_joined']
    search_fields = ['email', 'name']
    ordering = ['-date_joined']
    readonly_fields = ['last_login', 'date_joined', 'created_at', 'updated_at']

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Perfil', {'fields': ('name', 'avatar')}),
        ('Verificação', {'fields': ('is_verified', 'verification_token')}),
        ('Permissões', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',)
        }),
        ('Datas', {
            'fields': ('last_login', 'date_joined', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'name', 'password1', 'password2'),
        }),
    )

    def verificacao_badge(self, obj):
        """Exibe o estado de verificação com badge colorido"""
        cor = '#10B981' if obj.is_verified else '#F59E0B'
        texto = 'Verificado' if obj.is_verified else 'Pendente'
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 8px; border-radius: 4px; font-size: 11px;">{}</span>',
            cor, texto
        )

    verificacao_badge.short_description = 'Email'

    def boards_count(self, obj):
        """Conta boards do usuário"""
        return obj.boards.count()

    boards_count.short_description = 'Boards'


@admin.register(BackgroundImage)
class BackgroundImageAdmin(admin.ModelAdmin):
    list_display = ['name', 'preview', 'img_url']
    search_fields = ['name']

    def preview(self, obj):
        return format_html('<img src="{}" style="height: 32px; border-radius: 4px;">', obj.img_url)

    preview.short_description = 'Preview'
