# apps/board/coordinator.py

"""
Coordenador da hierarquia board -> colunas -> cards

Toda operação que envolve mais de um registro (criar filho no fim do
pai, apagar em cascata, mover card entre colunas) roda em uma única
transação, com as linhas dos pais travadas via select_for_update. Assim
duas requisições concorrentes no mesmo board/coluna são serializadas e
as posições continuam contíguas.

Ordem de travamento (a mesma em todas as operações): board, depois as
colunas em ordem de pk, por último o card.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from django.db import transaction
from django.db.models import Count

from apps.core.exceptions import ConflictError, NotFoundError, ValidationError

from .models import Board, Card, Column
from .repositories import BoardRepository, CardRepository, ColumnRepository

logger = logging.getLogger(__name__)


@dataclass
class MoveResult:
    card: Card
    old_column_id: int
    new_column_id: int

    def to_dict(self):
        return {
            'card': self.card.to_dict(),
            'oldColumnId': self.old_column_id,
            'newColumnId': self.new_column_id,
        }


@dataclass
class DeleteResult:
    """Resumo de uma remoção em cascata"""

    id: int
    name: str
    deleted_columns: int = 0
    deleted_cards: int = 0

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'deletedColumns': self.deleted_columns,
            'deletedCards': self.deleted_cards,
        }


@dataclass
class Inconsistency:
    parent: str
    parent_id: int
    positions: List[int] = field(default_factory=list)

    def __str__(self):
        return f"{self.parent} {self.parent_id}: posições {self.positions}"


class HierarchyCoordinator:
    """
    Ponto único de entrada para mutações da hierarquia

    As views nunca chamam os repositórios direto: passam pelo
    coordenador, que resolve o dono, aplica a operação e mantém a ordem
    dos filhos.
    """

    def __init__(self, boards: BoardRepository = None,
                 columns: ColumnRepository = None,
                 cards: CardRepository = None):
        self.boards = boards or BoardRepository()
        self.columns = columns or ColumnRepository()
        self.cards = cards or CardRepository()

    # =================== BOARDS ===================

    def list_boards(self, user) -> List[Board]:
        return self.boards.list(user)

    def get_board(self, user, board_id) -> Board:
        return self.boards.get(user, board_id)

    def create_board(self, user, name: str, icon: str = '', background=None) -> Board:
        board = self.boards.create(user, name, icon=icon, background=background)
        logger.info("Board %s '%s' criado por %s", board.pk, board.name, user.pk)
        return board

    def update_board(self, user, board_id, changes: Dict) -> Board:
        return self.boards.update(user, board_id, changes)

    def delete_board(self, user, board_id) -> DeleteResult:
        """Apaga o board com todas as colunas e cards"""
        with transaction.atomic():
            board = self.boards.get(user, board_id, lock=True)
            self.columns.lock_all(board)
            resultado = DeleteResult(
                id=board.pk,
                name=board.name,
                deleted_columns=Column.objects.filter(board=board).count(),
                deleted_cards=Card.objects.filter(column__board=board).count(),
            )
            self.boards.delete(board)

        logger.info(
            "Board %s apagado em cascata (%s colunas, %s cards)",
            resultado.id, resultado.deleted_columns, resultado.deleted_cards
        )
        return resultado

    # =================== COLUNAS ===================

    def create_column(self, user, board_id, name: str) -> Column:
        """Cria a coluna no fim do board"""
        with transaction.atomic():
            board = self.boards.get(user, board_id, lock=True)
            column = self.columns.create(board, name)

        logger.info("Coluna %s '%s' criada no board %s", column.pk, column.name, board.pk)
        return column

    def update_column(self, user, column_id, changes: Dict) -> Column:
        return self.columns.update(user, column_id, changes)

    def delete_column(self, user, column_id) -> DeleteResult:
        """Apaga a coluna e seus cards, fechando o buraco na ordem do board"""
        with transaction.atomic():
            column = self.columns.get(user, column_id)
            board = self.boards.get(user, column.board_id, lock=True)
            travadas = {c.pk: c for c in self.columns.lock_all(board)}
            if column.pk not in travadas:
                raise NotFoundError('Column not found')
            column = travadas[column.pk]

            resultado = DeleteResult(id=column.pk, name=column.name, deleted_columns=1)
            resultado.deleted_cards = self.columns.delete(column)
            self.columns.renumber(board)

        logger.info("Coluna %s apagada com %s cards", resultado.id, resultado.deleted_cards)
        return resultado

    # =================== CARDS ===================

    def create_card(self, user, column_id, title: str, description: str = '',
                    label_color: str = '', deadline: str = '') -> Card:
        """Cria o card no fim da coluna"""
        if not title:
            raise ValidationError('Card Name is required')

        with transaction.atomic():
            column = self.columns.get(user, column_id, lock=True)
            card = self.cards.create(
                column,
                title=title,
                description=description,
                label_color=label_color,
                deadline=deadline,
            )

        logger.info("Card %s criado na coluna %s", card.pk, column.pk)
        return card

    def update_card(self, user, card_id, changes: Dict) -> Card:
        if 'title' in changes and not changes['title']:
            raise ValidationError('Card Name is required')
        return self.cards.update(user, card_id, changes)

    def delete_card(self, user, card_id) -> Card:
        """Remove o card e fecha o buraco na ordem da coluna"""
        with transaction.atomic():
            card = self.cards.get(user, card_id)
            column = self.columns.get(user, card.column_id, lock=True)
            card = self._relock_card(user, card)

            snapshot = Card(
                pk=card.pk,
                column_id=card.column_id,
                title=card.title,
                description=card.description,
                label_color=card.label_color,
                deadline=card.deadline,
            )
            self.cards.delete(card)
            self.cards.renumber(column)

        logger.info("Card %s removido da coluna %s", snapshot.pk, column.pk)
        return snapshot

    def move_card(self, user, card_id, new_column_id, position: Optional[int] = None) -> MoveResult:
        """
        Transfere o card para outra coluna (ou reposiciona na mesma)

        Sai da origem, entra no destino na posição pedida (padrão: fim) e
        as duas colunas ficam com posições contíguas. Tudo ou nada.
        """
        if position is not None and position < 0:
            raise ValidationError('position must be a non-negative integer')

        with transaction.atomic():
            # Coluna de origem lida sem trava; conferida de novo abaixo
            card = self.cards.get(user, card_id)
            old_column_id = card.column_id

            travadas = {}
            for column_id in sorted({old_column_id, int(new_column_id)}):
                try:
                    travadas[column_id] = self.columns.get(user, column_id, lock=True)
                except NotFoundError:
                    if column_id == old_column_id:
                        raise NotFoundError('Old column not found')
                    raise NotFoundError('New column not found')

            card = self._relock_card(user, card)

            origem = travadas[old_column_id]
            destino = travadas[int(new_column_id)]

            # Retira o card da origem
            self.cards.renumber(origem, exclude=card)

            # Insere no destino
            limite = self.cards.count(destino, exclude=card)
            if position is None or position > limite:
                position = limite
            self.cards.open_slot(destino, position, exclude=card)

            card.column = destino
            card.position = position
            card.save(update_fields=['column', 'position', 'updated_at'])

        logger.info(
            "Card %s movido da coluna %s para %s (posição %s)",
            card.pk, old_column_id, destino.pk, position
        )
        return MoveResult(card=card, old_column_id=old_column_id, new_column_id=destino.pk)

    def _relock_card(self, user, card: Card) -> Card:
        """
        Trava o card depois das colunas e confere se ele não mudou de coluna

        Raises:
            ConflictError: se outra requisição moveu o card nesse meio tempo
        """
        travado = self.cards.get(user, card.pk, lock=True)
        if travado.column_id != card.column_id:
            raise ConflictError('Card was moved by another request')
        return travado

    # =================== CONSISTÊNCIA ===================

    def check(self, user=None) -> List[Inconsistency]:
        """
        Procura pais cujos filhos não têm posições 0..n-1

        A pertinência é derivada da FK, então a única forma de
        inconsistência possível é a ordem (buracos ou posições repetidas).
        """
        problemas = []

        boards = Board.objects.all() if user is None else Board.objects.filter(user=user)
        for board in boards.prefetch_related('columns'):
            posicoes = sorted(c.position for c in board.columns.all())
            if posicoes != list(range(len(posicoes))):
                problemas.append(Inconsistency('board', board.pk, posicoes))

        colunas = Column.objects.annotate(total=Count('cards'))
        if user is not None:
            colunas = colunas.filter(board__user=user)
        for column in colunas.filter(total__gt=0).prefetch_related('cards'):
            posicoes = sorted(c.position for c in column.cards.all())
            if posicoes != list(range(len(posicoes))):
                problemas.append(Inconsistency('column', column.pk, posicoes))

        for problema in problemas:
            logger.warning("Ordem inconsistente em %s", problema)
        return problemas

    def repair(self, user=None) -> int:
        """Renumera todos os pais inconsistentes; rodar de novo não muda nada"""
        corrigidos = 0
        for problema in self.check(user):
            with transaction.atomic():
                if problema.parent == 'board':
                    board = Board.objects.select_for_update().get(pk=problema.parent_id)
                    self.columns.renumber(board)
                else:
                    column = Column.objects.select_for_update().get(pk=problema.parent_id)
                    self.cards.renumber(column)
            corrigidos += 1

        if corrigidos:
            logger.info("%s pais renumerados", corrigidos)
        return corrigidos


# Instância global usada pelas views
hierarchy = HierarchyCoordinator()
