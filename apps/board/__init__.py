# apps/board/__init__.py

"""
Board - Hierarquia Kanban do TaskPro

Funcionalidades:
- Boards por usuário, com colunas e cards ordenados
- Coordenador transacional para criar, mover e apagar em cascata
- Verificação e reparo da ordem (manage.py check_hierarchy)
"""
