# apps/board/models.py

from django.conf import settings
from django.db import models


class Board(models.Model):
    """
    Quadro Kanban de um usuário

    As colunas pertencem ao board pela FK Column.board; a lista ordenada
    de colunas é derivada (ordenada por position), nunca guardada em dois
    lugares.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='boards'
    )
    name = models.CharField(max_length=200)
    icon = models.CharField(max_length=200, blank=True, default='')
    background = models.CharField(max_length=500, null=True, blank=True, default=None)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'board'
        ordering = ['created_at', 'id']
        constraints = [
            models.UniqueConstraint(fields=['user', 'name'], name='unique_board_name_per_user'),
        ]

    def __str__(self):
        return f"{self.name} ({self.user_id})"

    def to_dict(self, hydrate=False):
        """
        Serializa o board

        Com hydrate=True as colunas (e os cards delas) vêm como objetos;
        senão apenas os ids na ordem de exibição. Usa o prefetch quando
        houver, por isso ordena em Python.
        """
        colunas = sorted(self.columns.all(), key=lambda c: (c.position, c.id))
        return {
            'id': self.id,
            'name': self.name,
            'icon': self.icon,
            'background': self.background,
            'owner': self.user_id,
            'columns': [c.to_dict(hydrate=True) if hydrate else c.id for c in colunas],
        }


class Column(models.Model):
    """Coluna do board Kanban"""

    board = models.ForeignKey(
        Board,
        on_delete=models.CASCADE,
        related_name='columns'
    )
    name = models.CharField(max_length=100)
    position = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'board_column'
        ordering = ['position', 'id']
        constraints = [
            models.UniqueConstraint(fields=['board', 'name'], name='unique_column_name_per_board'),
        ]

    def __str__(self):
        return f"{self.name} - board {self.board_id}"

    def to_dict(self, hydrate=False):
        cards = sorted(self.cards.all(), key=lambda c: (c.position, c.id))
        return {
            'id': self.id,
            'name': self.name,
            'owner': self.board_id,
            'cards': [c.to_dict() if hydrate else c.id for c in cards],
        }


class Card(models.Model):
    """Card (tarefa) dentro de uma coluna"""

    column = models.ForeignKey(
        Column,
        on_delete=models.CASCADE,
        related_name='cards'
    )
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    label_color = models.CharField(max_length=32, blank=True, default='')
    deadline = models.CharField(
        max_length=32,
        blank=True,
        default='',
        help_text="Data em texto livre, como enviada pelo frontend"
    )
    position = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'board_card'
        ordering = ['position', 'id']

    def __str__(self):
        return self.title

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'labelColor': self.label_color,
            'deadline': self.deadline,
            'owner': self.column_id,
        }
