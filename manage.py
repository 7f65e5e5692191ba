#!/usr/bin/env python
"""
Django's command-line utility for administrative tasks.

TaskPro - API Kanban
"""

import os
import sys


def main():
    """Run administrative tasks."""

    # Configuração padrão para desenvolvimento
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    # Comandos customizados do TaskPro
    if len(sys.argv) > 1:
        command = sys.argv[1]
        python = sys.executable

        # Comando de setup inicial
        if command == 'setup':
            print("🚀 Configurando TaskPro...")

            print("📊 Aplicando migrações...")
            if os.system(f'"{python}" manage.py migrate') != 0:
                print("❌ Erro nas migrações")
                return

            print("📁 Coletando arquivos estáticos...")
            os.system(f'"{python}" manage.py collectstatic --noinput')

            print("🔍 Verificando hierarquia dos boards...")
            os.system(f'"{python}" manage.py check_hierarchy')

            print("✅ Setup concluído!")
            print("👤 Crie um admin com: python manage.py createsuperuser")
            return

        elif command == 'backup':
            print("💾 Criando backup do banco...")
            from datetime import datetime
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            backup_file = f"backup_taskpro_{timestamp}.json"
            os.system(f'"{python}" manage.py dumpdata core board --indent 2 > {backup_file}')
            print(f"✅ Backup criado: {backup_file}")
            return

        # Comando de reset
        elif command == 'reset':
            confirm = input("⚠️  Isso irá apagar TODOS os dados. Continuar? (y/N): ")
            if confirm.lower() == 'y':
                print("🗑️  Resetando banco de dados...")
                os.system(f'"{python}" manage.py flush --noinput')
                os.system(f'"{python}" manage.py migrate')
                print("✅ Reset concluído!")
            return

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
