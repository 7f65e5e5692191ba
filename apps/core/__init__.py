# apps/core/__init__.py

"""
Core - Identidade do TaskPro

Contém:
- Models User e BackgroundImage
- Serviço de autenticação (cadastro, verificação de email, tokens)
- Taxonomia de erros e middleware que a traduz para JSON
"""
