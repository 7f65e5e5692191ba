# apps/board/repositories.py

"""
Repositórios da hierarquia Kanban

Cada repositório mexe em uma única tabela e sempre filtra pelo dono
(usuário) - registro de outro usuário é tratado como inexistente.
Operações que envolvem pai e filho ao mesmo tempo ficam no
HierarchyCoordinator, que chama estes métodos dentro de uma transação.
"""

from typing import Dict, List

from django.db import IntegrityError, transaction
from django.db.models import F, Max, Prefetch, QuerySet

from apps.core.exceptions import ConflictError, NotFoundError

from .models import Board, Card, Column


def _next_position(queryset: QuerySet) -> int:
    ultima = queryset.aggregate(ultima=Max('position'))['ultima']
    return 0 if ultima is None else ultima + 1


def _renumber(queryset: QuerySet) -> int:
    """Deixa as posições contíguas a partir de 0; devolve quantas mudaram"""
    alteradas = 0
    for indice, registro in enumerate(queryset.order_by('position', 'id')):
        if registro.position != indice:
            type(registro).objects.filter(pk=registro.pk).update(position=indice)
            alteradas += 1
    return alteradas


class BoardRepository:
    """CRUD de boards, escopado pelo usuário dono"""

    def get(self, user, board_id, lock: bool = False) -> Board:
        queryset = Board.objects.filter(user=user)
        if lock:
            queryset = queryset.select_for_update(of=('self',))
        try:
            return queryset.get(pk=board_id)
        except Board.DoesNotExist:
            raise NotFoundError('Board not found')

    def list(self, user) -> List[Board]:
        """Boards do usuário com colunas e cards já carregados"""
        colunas = Column.objects.order_by('position', 'id').prefetch_related(
            Prefetch('cards', queryset=Card.objects.order_by('position', 'id'))
        )
        return list(
            Board.objects.filter(user=user)
            .prefetch_related(Prefetch('columns', queryset=colunas))
            .order_by('created_at', 'id')
        )

    def create(self, user, name: str, icon: str = '', background=None) -> Board:
        if Board.objects.filter(user=user, name=name).exists():
            raise ConflictError('Name already in use')

        try:
            with transaction.atomic():
                return Board.objects.create(
                    user=user,
                    name=name,
                    icon=icon or '',
                    background=background,
                )
        except IntegrityError:
            raise ConflictError('Name already in use')

    def update(self, user, board_id, changes: Dict) -> Board:
        board = self.get(user, board_id)

        novo_nome = changes.get('name')
        if novo_nome and novo_nome != board.name:
            if Board.objects.filter(user=user, name=novo_nome).exclude(pk=board.pk).exists():
                raise ConflictError('Name already in use')

        for campo in ('name', 'icon', 'background'):
            if campo in changes:
                setattr(board, campo, changes[campo])

        try:
            with transaction.atomic():
                board.save()
        except IntegrityError:
            raise ConflictError('Name already in use')
        return board

    def delete(self, board: Board) -> None:
        board.delete()


class ColumnRepository:
    """CRUD de colunas; a ordem dentro do board vem de position"""

    def get(self, user, column_id, lock: bool = False) -> Column:
        queryset = Column.objects.filter(board__user=user)
        if lock:
            queryset = queryset.select_for_update(of=('self',))
        try:
            return queryset.get(pk=column_id)
        except Column.DoesNotExist:
            raise NotFoundError('Column not found')

    def create(self, board: Board, name: str) -> Column:
        """Cria a coluna no fim do board (chamar com o board travado)"""
        if Column.objects.filter(board=board, name=name).exists():
            raise ConflictError('Name already in use')

        try:
            with transaction.atomic():
                return Column.objects.create(
                    board=board,
                    name=name,
                    position=_next_position(board.columns.all()),
                )
        except IntegrityError:
            raise ConflictError('Name already in use')

    def update(self, user, column_id, changes: Dict) -> Column:
        column = self.get(user, column_id)

        novo_nome = changes.get('name')
        if novo_nome and novo_nome != column.name:
            if Column.objects.filter(board_id=column.board_id, name=novo_nome).exclude(pk=column.pk).exists():
                raise ConflictError('Name already in use')
            column.name = novo_nome

            try:
                with transaction.atomic():
                    column.save(update_fields=['name'])
            except IntegrityError:
                raise ConflictError('Name already in use')
        return column

    def delete(self, column: Column) -> int:
        """Apaga a coluna e todos os seus cards; devolve quantos cards saíram"""
        cards_apagados, _ = Card.objects.filter(column=column).delete()
        column.delete()
        return cards_apagados

    def lock_all(self, board: Board) -> List[Column]:
        """Trava todas as colunas do board, sempre em ordem de pk"""
        return list(Column.objects.filter(board=board).select_for_update().order_by('pk'))

    def renumber(self, board: Board) -> int:
        return _renumber(Column.objects.filter(board=board))


class CardRepository:
    """CRUD de cards; a ordem dentro da coluna vem de position"""

    editable_fields = ('title', 'description', 'label_color', 'deadline')

    def get(self, user, card_id, lock: bool = False) -> Card:
        queryset = Card.objects.filter(column__board__user=user)
        if lock:
            queryset = queryset.select_for_update(of=('self',))
        try:
            return queryset.get(pk=card_id)
        except Card.DoesNotExist:
            raise NotFoundError('Card not found')

    def create(self, column: Column, title: str, description: str = '',
               label_color: str = '', deadline: str = '') -> Card:
        """Cria o card no fim da coluna (chamar com a coluna travada)"""
        return Card.objects.create(
            column=column,
            title=title,
            description=description or '',
            label_color=label_color or '',
            deadline=deadline or '',
            position=_next_position(column.cards.all()),
        )

    def update(self, user, card_id, changes: Dict) -> Card:
        card = self.get(user, card_id)

        campos = [campo for campo in self.editable_fields if campo in changes]
        for campo in campos:
            setattr(card, campo, changes[campo] or '')

        if campos:
            card.save(update_fields=campos + ['updated_at'])
        return card

    def delete(self, card: Card) -> None:
        card.delete()

    def open_slot(self, column: Column, position: int, exclude: Card = None) -> None:
        """Empurra uma posição para frente os cards a partir de `position`"""
        queryset = Card.objects.filter(column=column, position__gte=position)
        if exclude is not None:
            queryset = queryset.exclude(pk=exclude.pk)
        queryset.update(position=F('position') + 1)

    def count(self, column: Column, exclude: Card = None) -> int:
        queryset = Card.objects.filter(column=column)
        if exclude is not None:
            queryset = queryset.exclude(pk=exclude.pk)
        return queryset.count()

    def renumber(self, column: Column, exclude: Card = None) -> int:
        queryset = Card.objects.filter(column=column)
        if exclude is not None:
            queryset = queryset.exclude(pk=exclude.pk)
        return _renumber(queryset)
