# apps/board/admin.py

from django.contrib import admin
from django.utils.html import format_html

from .models import Board, Card, Column


@admin.register(Board)
class BoardAdmin(admin.ModelAdmin):
    """Admin para boards Kanban"""

    list_display = ['name', 'user', 'colunas_count', 'cards_count', 'created_at']
    list_filter = ['created_at']
    search_fields = ['name', 'user__email']
    readonly_fields = ['created_at', 'updated_at']

    def colunas_count(self, obj):
        """Conta colunas do board"""
        return obj.columns.count()

    colunas_count.short_description = 'Colunas'

    def cards_count(self, obj):
        return Card.objects.filter(column__board=obj).count()

    cards_count.short_description = 'Cards'


class CardInline(admin.TabularInline):
    """Inline para cards na coluna"""
    model = Card
    extra = 0
    fields = ['title', 'label_color', 'deadline', 'position']
    ordering = ['position']


@admin.register(Column)
class ColumnAdmin(admin.ModelAdmin):
    """Admin para colunas do Kanban"""

    list_display = ['name', 'board', 'position', 'cards_count']
    list_filter = ['board']
    search_fields = ['name', 'board__name']
    ordering = ['board', 'position']

    inlines = [CardInline]

    def cards_count(self, obj):
        return obj.cards.count()

    cards_count.short_description = 'Cards'


@admin.register(Card)
class CardAdmin(admin.ModelAdmin):
    list_display = ['title', 'column', 'position', 'cor_preview', 'deadline', 'updated_at']
    list_filter = ['column__board']
    search_fields = ['title', 'description']
    readonly_fields = ['created_at', 'updated_at']

    def cor_preview(self, obj):
        """Preview da cor do label"""
        if not obj.label_color:
            return '-'
        return format_html(
            '<div style="width: 20px; height: 20px; background-color: {}; '
            'border: 1px solid #ccc; border-radius: 3px;"></div>',
            obj.label_color
        )

    cor_preview.short_description = 'Label'
