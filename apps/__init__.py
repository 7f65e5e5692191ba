# apps/__init__.py

"""
TaskPro - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: identidade, autenticação e tratamento de erros
- board: hierarquia board -> colunas -> cards
"""

__version__ = '0.1.0'
__author__ = 'Equipe TaskPro'
