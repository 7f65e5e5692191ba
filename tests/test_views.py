"""
Testes da API HTTP (/taskPro/...) pelo test client do Django.

Cobre:
    - envelope {status, code, data|error} e status HTTP de cada erro
    - fluxo de conta: signup -> verify -> login -> current-user -> logout
    - CRUD de boards, colunas e cards e o moveCard
"""

from io import BytesIO

import pytest
from django.core import mail
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test.client import BOUNDARY, MULTIPART_CONTENT, encode_multipart
from PIL import Image

from apps.board.models import Card
from apps.core.models import BackgroundImage, User

from .conftest import ApiClient


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()


def png_bytes(size=(400, 400)):
    buffer = BytesIO()
    Image.new('RGB', size, color=(10, 120, 200)).save(buffer, format='PNG')
    return buffer.getvalue()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Conta
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


@pytest.mark.django_db
class TestAccountFlow:

    def test_full_flow(self, api):
        resposta = api.send('post', '/taskPro/signup/', {
            'email': 'nova@example.com', 'password': 'Quadro-Kanban-2024', 'name': 'Nova',
        })
        assert resposta.status_code == 201
        assert resposta.json() == {
            'status': 'success',
            'code': 201,
            'data': {'user': {'email': 'nova@example.com', 'name': 'Nova'}},
        }

        # Antes de verificar o login falha
        resposta = api.send('post', '/taskPro/login/', {'email': 'nova@example.com', 'password': 'Quadro-Kanban-2024'})
        assert resposta.status_code == 401

        token = User.objects.get(email='nova@example.com').verification_token
        assert api.get(f'/taskPro/verify/{token}/').status_code == 200

        resposta = api.send('post', '/taskPro/login/', {'email': 'nova@example.com', 'password': 'Quadro-Kanban-2024'})
        assert resposta.status_code == 200
        dados = resposta.json()['data']
        assert dados['user']['email'] == 'nova@example.com'
        assert 'password' not in dados['user']
        assert dados['expiresAt']

        cliente = ApiClient(token=dados['token'])
        assert cliente.get('/taskPro/current-user/').json()['data']['name'] == 'Nova'

        resposta = cliente.get('/taskPro/logout/')
        assert resposta.status_code == 204
        assert resposta.content == b''
        assert cliente.get('/taskPro/current-user/').status_code == 401

    def test_signup_conflict(self, api, user):
        resposta = api.send('post', '/taskPro/signup/', {
            'email': 'ana@example.com', 'password': 'x', 'name': 'Outra',
        })
        assert resposta.status_code == 409
        assert resposta.json() == {'status': 'error', 'code': 409, 'error': 'Email already in use'}

    def test_signup_missing_fields(self, api):
        resposta = api.send('post', '/taskPro/signup/', {'email': 'nova@example.com'})
        assert resposta.status_code == 400
        assert resposta.json()['status'] == 'error'

    def test_malformed_json(self, api):
        resposta = api.post('/taskPro/login/', data='{quebrado', content_type='application/json')
        assert resposta.status_code == 400

    def test_resend_verification(self, api, make_user):
        make_user(email='pendente@example.com', verified=False)
        resposta = api.send('post', '/taskPro/user/verify/', {'email': 'pendente@example.com'})
        assert resposta.status_code == 200
        assert len(mail.outbox) == 1

    def test_resend_for_verified_account(self, api, user):
        resposta = api.send('post', '/taskPro/user/verify/', {'email': 'ana@example.com'})
        assert resposta.status_code == 400

    def test_verify_unknown_token(self, api):
        assert api.get('/taskPro/verify/nao-existe/').status_code == 404

    def test_logout_without_token(self, api):
        assert api.send('post', '/taskPro/logout/').status_code == 401

    def test_current_user_with_bad_token(self, db):
        resposta = ApiClient(token='lixo').get('/taskPro/current-user/')
        assert resposta.status_code == 401
        assert resposta.json()['error'] == 'Invalid token'


@pytest.mark.django_db
class TestProfileUpdate:

    def test_patch_json(self, auth_api, user):
        resposta = auth_api.send('patch', '/taskPro/current-user/update/', {'name': 'Ana Maria'})
        assert resposta.status_code == 200
        assert resposta.json()['data']['user']['name'] == 'Ana Maria'
        user.refresh_from_db()
        assert user.email == 'ana@example.com'

    def test_multipart_avatar(self, auth_api, user):
        arquivo = SimpleUploadedFile('me.png', png_bytes(), content_type='image/png')
        resposta = auth_api.post(
            '/taskPro/current-user/update/',
            data={'avatar': arquivo, 'name': 'Ana'},
            headers={'Authorization': f'Bearer {auth_api.token}'},
        )
        assert resposta.status_code == 200
        assert '/avatars/' in resposta.json()['data']['user']['avatar']

    def test_non_image_avatar(self, auth_api):
        arquivo = SimpleUploadedFile('me.png', b'texto', content_type='image/png')
        resposta = auth_api.post(
            '/taskPro/current-user/update/',
            data={'avatar': arquivo},
            headers={'Authorization': f'Bearer {auth_api.token}'},
        )
        assert resposta.status_code == 400

    def test_requires_token(self, api):
        assert api.send('patch', '/taskPro/current-user/update/', {'name': 'X'}).status_code == 401

    def test_patch_multipart_avatar(self, auth_api, user):
        arquivo = SimpleUploadedFile('me.png', png_bytes(), content_type='image/png')
        resposta = auth_api.patch(
            '/taskPro/current-user/update/',
            data=encode_multipart(BOUNDARY, {'avatar': arquivo, 'name': 'Ana Paula'}),
            content_type=MULTIPART_CONTENT,
            headers={'Authorization': f'Bearer {auth_api.token}'},
        )
        assert resposta.status_code == 200
        dados = resposta.json()['data']['user']
        assert '/avatars/' in dados['avatar']
        assert dados['name'] == 'Ana Paula'

    def test_weak_password_is_400(self, auth_api):
        resposta = auth_api.send('patch', '/taskPro/current-user/update/', {'password': '123'})
        assert resposta.status_code == 400


@pytest.mark.django_db
class TestNonStringFields:

    @pytest.mark.parametrize('payload', [
        {'email': 'nova@example.com', 'password': 'Quadro-Kanban-2024', 'name': 123},
        {'email': 'nova@example.com', 'password': 12345678, 'name': 'Nova'},
        {'email': ['nova@example.com'], 'password': 'Quadro-Kanban-2024', 'name': 'Nova'},
    ])
    def test_signup(self, api, payload):
        resposta = api.send('post', '/taskPro/signup/', payload)
        assert resposta.status_code == 400
        assert resposta.json()['status'] == 'error'
        assert not User.objects.exists()

    def test_login_with_numeric_password(self, api, user):
        resposta = api.send('post', '/taskPro/login/', {'email': 'ana@example.com', 'password': 12345678})
        assert resposta.status_code == 400

    def test_resend_with_object_email(self, api):
        resposta = api.send('post', '/taskPro/user/verify/', {'email': {'x': 1}})
        assert resposta.status_code == 400

    @pytest.mark.parametrize('payload', [{'name': ['a']}, {'password': 12345678}, {'email': 7}])
    def test_profile_update(self, auth_api, user, payload):
        resposta = auth_api.send('patch', '/taskPro/current-user/update/', payload)
        assert resposta.status_code == 400
        user.refresh_from_db()
        assert user.name == 'Ana'
        assert user.check_password('s3nha-forte')

    def test_board_name_number(self, auth_api):
        resposta = auth_api.send('post', '/taskPro/homepage/addBoard/', {'name': 42})
        assert resposta.status_code == 400


@pytest.mark.django_db
def test_background_images(api):
    BackgroundImage.objects.create(name='Praia', img_url='https://example.com/praia.jpg')
    resposta = api.get('/taskPro/background/')
    assert resposta.json()['data'] == [
        {'id': BackgroundImage.objects.get().id, 'name': 'Praia', 'imgURL': 'https://example.com/praia.jpg'}
    ]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Kanban
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


@pytest.mark.django_db
class TestBoardEndpoints:

    def create_board(self, client, name='Work'):
        resposta = client.send('post', '/taskPro/homepage/addBoard/', {
            'name': name, 'icon': 'i1', 'background': None,
        })
        assert resposta.status_code == 201
        return resposta.json()['data']

    def test_requires_token(self, api):
        resposta = api.get('/taskPro/homepage/')
        assert resposta.status_code == 401
        assert resposta.json()['error'] == 'Not authorized'

    def test_create_and_list(self, auth_api):
        board = self.create_board(auth_api)
        assert board['columns'] == []
        assert board['background'] is None

        resposta = auth_api.get('/taskPro/homepage/')
        assert [b['id'] for b in resposta.json()['data']] == [board['id']]

    def test_duplicate_board_name(self, auth_api):
        self.create_board(auth_api)
        resposta = auth_api.send('post', '/taskPro/homepage/addBoard/', {'name': 'Work'})
        assert resposta.status_code == 409

    def test_board_name_required(self, auth_api):
        resposta = auth_api.send('post', '/taskPro/homepage/addBoard/', {'icon': 'i1'})
        assert resposta.status_code == 400

    def test_update_board_partially(self, auth_api):
        board = self.create_board(auth_api)
        resposta = auth_api.send('patch', f"/taskPro/homepage/update/{board['id']}/", {'background': 'bg.png'})
        dados = resposta.json()['data']
        assert (dados['name'], dados['icon'], dados['background']) == ('Work', 'i1', 'bg.png')

    def test_blank_name_on_update(self, auth_api):
        board = self.create_board(auth_api)
        resposta = auth_api.send('patch', f"/taskPro/homepage/update/{board['id']}/", {'name': ''})
        assert resposta.status_code == 400

    def test_other_users_board_is_404(self, auth_api, other_user):
        board = self.create_board(auth_api)
        outro_token = ApiClient().send('post', '/taskPro/login/', {
            'email': 'bruno@example.com', 'password': 's3nha-forte',
        }).json()['data']['token']
        intruso = ApiClient(token=outro_token)

        assert intruso.send('delete', f"/taskPro/homepage/delete/{board['id']}/").status_code == 404
        assert intruso.get(f"/taskPro/homepage/boards/{board['id']}/").status_code == 404
        assert intruso.get('/taskPro/homepage/').json()['data'] == []

    def test_get_single_board_is_hydrated(self, auth_api):
        board = self.create_board(auth_api)
        coluna = auth_api.send('post', f"/taskPro/homepage/boards/{board['id']}/", {'name': 'Todo'}).json()['data']
        card = auth_api.send(
            'post', f"/taskPro/homepage/boards/addCard/{coluna['id']}/", {'title': 'A'}
        ).json()['data']

        resposta = auth_api.get(f"/taskPro/homepage/boards/{board['id']}/")

        assert resposta.status_code == 200
        dados = resposta.json()['data']
        assert dados['id'] == board['id']
        assert dados['columns'][0]['name'] == 'Todo'
        assert [c['id'] for c in dados['columns'][0]['cards']] == [card['id']]

    def test_get_missing_board(self, auth_api):
        resposta = auth_api.get('/taskPro/homepage/boards/424242/')
        assert resposta.status_code == 404
        assert resposta.json()['error'] == 'Board not found'

    def test_full_kanban_flow(self, auth_api):
        board = self.create_board(auth_api)

        todo = auth_api.send('post', f"/taskPro/homepage/boards/{board['id']}/", {'name': 'Todo'})
        assert todo.status_code == 201
        todo = todo.json()['data']
        done = auth_api.send('post', f"/taskPro/homepage/boards/{board['id']}/", {'name': 'Done'}).json()['data']

        card = auth_api.send('post', f"/taskPro/homepage/boards/addCard/{todo['id']}/", {
            'title': 'Fix bug', 'labelColor': '#FF0000', 'deadline': '2024-05-01',
        })
        assert card.status_code == 201
        card = card.json()['data']
        assert card['labelColor'] == '#FF0000'
        assert card['owner'] == todo['id']

        resposta = auth_api.send(
            'patch', f"/taskPro/homepage/boards/updateCard/{card['id']}/", {'description': 'detalhes'}
        )
        assert resposta.json()['data']['title'] == 'Fix bug'
        assert resposta.json()['data']['description'] == 'detalhes'

        resposta = auth_api.send('patch', f"/taskPro/homepage/boards/moveCard/{card['id']}/{done['id']}/")
        assert resposta.status_code == 200
        movido = resposta.json()['data']
        assert movido['oldColumnId'] == todo['id']
        assert movido['newColumnId'] == done['id']
        assert movido['card']['owner'] == done['id']

        [hidratado] = auth_api.get('/taskPro/homepage/').json()['data']
        colunas = {c['name']: c for c in hidratado['columns']}
        assert colunas['Todo']['cards'] == []
        assert [c['id'] for c in colunas['Done']['cards']] == [card['id']]

        resposta = auth_api.send('patch', f"/taskPro/homepage/boards/updateColumn/{done['id']}/", {'name': 'Feito'})
        assert resposta.json()['data']['name'] == 'Feito'

        resposta = auth_api.send('delete', f"/taskPro/homepage/boards/removeCard/{card['id']}/")
        assert resposta.json()['data']['id'] == card['id']
        assert not Card.objects.exists()

        resposta = auth_api.send('delete', f"/taskPro/homepage/boards/deleteColumn/{todo['id']}/")
        assert resposta.status_code == 200

        resposta = auth_api.send('delete', f"/taskPro/homepage/delete/{board['id']}/")
        assert resposta.json()['data']['deletedColumns'] == 1

    def test_move_with_position(self, auth_api):
        board = self.create_board(auth_api)
        coluna = auth_api.send('post', f"/taskPro/homepage/boards/{board['id']}/", {'name': 'Todo'}).json()['data']
        ids = [
            auth_api.send('post', f"/taskPro/homepage/boards/addCard/{coluna['id']}/", {'title': t}).json()['data']['id']
            for t in 'ABC'
        ]

        auth_api.send('patch', f"/taskPro/homepage/boards/moveCard/{ids[2]}/{coluna['id']}/", {'position': 0})

        [hidratado] = auth_api.get('/taskPro/homepage/').json()['data']
        assert [c['id'] for c in hidratado['columns'][0]['cards']] == [ids[2], ids[0], ids[1]]

    def test_move_with_invalid_position(self, auth_api):
        board = self.create_board(auth_api)
        coluna = auth_api.send('post', f"/taskPro/homepage/boards/{board['id']}/", {'name': 'Todo'}).json()['data']
        card = auth_api.send(
            'post', f"/taskPro/homepage/boards/addCard/{coluna['id']}/", {'title': 'A'}
        ).json()['data']
        resposta = auth_api.send(
            'patch', f"/taskPro/homepage/boards/moveCard/{card['id']}/{coluna['id']}/", {'position': -3}
        )
        assert resposta.status_code == 400

    def test_card_title_required(self, auth_api):
        board = self.create_board(auth_api)
        coluna = auth_api.send('post', f"/taskPro/homepage/boards/{board['id']}/", {'name': 'Todo'}).json()['data']
        resposta = auth_api.send('post', f"/taskPro/homepage/boards/addCard/{coluna['id']}/", {'description': 'x'})
        assert resposta.status_code == 400

    def test_wrong_method(self, auth_api):
        assert auth_api.get('/taskPro/homepage/addBoard/').status_code == 405
        assert auth_api.send('put', '/taskPro/homepage/boards/1/', {'name': 'x'}).status_code == 405


@pytest.mark.django_db
def test_health(api):
    resposta = api.get('/health/')
    assert resposta.status_code == 200
    assert resposta.json()['data']['database'] == 'ok'


@pytest.mark.django_db
def test_unknown_route_is_json_404(api):
    resposta = api.get('/taskPro/nao-existe/')
    assert resposta.status_code == 404
    assert resposta.json()['status'] == 'error'
