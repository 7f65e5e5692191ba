# apps/board/views.py

from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.forms import validate_payload
from apps.core.permissions import token_required
from apps.core.utils import api_response, read_json_body

from .coordinator import hierarchy
from .forms import BoardForm, CardForm, ColumnForm, MoveCardForm, card_changes


# =================== BOARDS ===================

@require_http_methods(["GET"])
@token_required
def board_list_view(request):
    """
    Homepage do usuário

    Devolve todos os boards já hidratados (colunas com cards), na ordem
    em que foram criados.
    """
    boards = hierarchy.list_boards(request.account)
    return api_response([board.to_dict(hydrate=True) for board in boards])


@csrf_exempt
@require_http_methods(["POST"])
@token_required
def board_create_view(request):
    data = validate_payload(BoardForm, read_json_body(request))

    board = hierarchy.create_board(
        request.account,
        name=data['name'].strip(),
        icon=data.get('icon') or '',
        background=data.get('background'),
    )
    return api_response(board.to_dict(), code=201)


@csrf_exempt
@require_http_methods(["PATCH"])
@token_required
def board_update_view(request, board_id):
    changes = validate_payload(BoardForm, read_json_body(request), partial=True)
    if 'name' in changes:
        changes['name'] = changes['name'].strip()

    board = hierarchy.update_board(request.account, board_id, changes)
    return api_response(board.to_dict())


@csrf_exempt
@require_http_methods(["DELETE"])
@token_required
def board_delete_view(request, board_id):
    resultado = hierarchy.delete_board(request.account, board_id)
    return api_response(resultado.to_dict())


# =================== COLUNAS ===================

@csrf_exempt
@require_http_methods(["GET", "POST"])
@token_required
def board_detail_view(request, board_id):
    """
    GET devolve o board hidratado; POST cria uma coluna no fim dele
    """
    if request.method == 'GET':
        board = hierarchy.get_board(request.account, board_id)
        return api_response(board.to_dict(hydrate=True))

    data = validate_payload(ColumnForm, read_json_body(request))

    column = hierarchy.create_column(request.account, board_id, data['name'].strip())
    return api_response(column.to_dict(), code=201)


@csrf_exempt
@require_http_methods(["PATCH"])
@token_required
def column_update_view(request, column_id):
    changes = validate_payload(ColumnForm, read_json_body(request), partial=True)
    if 'name' in changes:
        changes['name'] = changes['name'].strip()

    column = hierarchy.update_column(request.account, column_id, changes)
    return api_response(column.to_dict())


@csrf_exempt
@require_http_methods(["DELETE"])
@token_required
def column_delete_view(request, column_id):
    resultado = hierarchy.delete_column(request.account, column_id)
    return api_response(resultado.to_dict())


# =================== CARDS ===================

@csrf_exempt
@require_http_methods(["POST"])
@token_required
def card_create_view(request, column_id):
    data = card_changes(validate_payload(CardForm, read_json_body(request)))

    card = hierarchy.create_card(
        request.account,
        column_id,
        title=data['title'].strip(),
        description=data.get('description', ''),
        label_color=data.get('label_color', ''),
        deadline=data.get('deadline', ''),
    )
    return api_response(card.to_dict(), code=201)


@csrf_exempt
@require_http_methods(["PATCH"])
@token_required
def card_update_view(request, card_id):
    changes = card_changes(validate_payload(CardForm, read_json_body(request), partial=True))
    if 'title' in changes:
        changes['title'] = changes['title'].strip()

    card = hierarchy.update_card(request.account, card_id, changes)
    return api_response(card.to_dict())


@csrf_exempt
@require_http_methods(["DELETE"])
@token_required
def card_delete_view(request, card_id):
    card = hierarchy.delete_card(request.account, card_id)
    return api_response(card.to_dict())


@csrf_exempt
@require_http_methods(["PATCH"])
@token_required
def card_move_view(request, card_id, column_id):
    """
    Move o card para outra coluna

    Body opcional: {"position": n}. Sem posição o card vai para o fim.
    """
    data = validate_payload(MoveCardForm, read_json_body(request), partial=True)

    resultado = hierarchy.move_card(
        request.account,
        card_id,
        column_id,
        position=data.get('position'),
    )
    return api_response(resultado.to_dict())
