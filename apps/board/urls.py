# apps/board/urls.py

from django.urls import path
from . import views

app_name = 'board'

urlpatterns = [
    # Boards
    path('homepage/', views.board_list_view, name='boards'),
    path('homepage/addBoard/', views.board_create_view, name='add_board'),
    path('homepage/update/<int:board_id>/', views.board_update_view, name='update_board'),
    path('homepage/delete/<int:board_id>/', views.board_delete_view, name='delete_board'),

    # Colunas
    path('homepage/boards/<int:board_id>/', views.board_detail_view, name='board'),
    path('homepage/boards/updateColumn/<int:column_id>/', views.column_update_view, name='update_column'),
    path('homepage/boards/deleteColumn/<int:column_id>/', views.column_delete_view, name='delete_column'),

    # Cards
    path('homepage/boards/addCard/<int:column_id>/', views.card_create_view, name='add_card'),
    path('homepage/boards/updateCard/<int:card_id>/', views.card_update_view, name='update_card'),
    path('homepage/boards/removeCard/<int:card_id>/', views.card_delete_view, name='remove_card'),
    path(
        'homepage/boards/moveCard/<int:card_id>/<int:column_id>/',
        views.card_move_view,
        name='move_card'
    ),
]
