# apps/board/management/commands/check_hierarchy.py

from django.core.management.base import BaseCommand

from apps.board.coordinator import hierarchy
from apps.core.models import User


class Command(BaseCommand):
    help = 'Verifica a ordem de colunas e cards de todos os boards (--fix para renumerar)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Renumera as posições dos pais inconsistentes',
        )
        parser.add_argument(
            '--email',
            help='Restringe a verificação aos boards de um usuário',
        )

    def handle(self, *args, **options):
        usuario = None
        if options.get('email'):
            usuario = User.objects.filter(email=options['email'].lower()).first()
            if usuario is None:
                self.stdout.write(self.style.ERROR(f"Usuário {options['email']} não encontrado"))
                return

        self.stdout.write('🔍 Verificando hierarquia board -> colunas -> cards...')

        problemas = hierarchy.check(usuario)
        if not problemas:
            self.stdout.write(self.style.SUCCESS('✅ Nenhuma inconsistência encontrada'))
            return

        for problema in problemas:
            self.stdout.write(self.style.WARNING(f'  ⚠️ {problema}'))

        if not options['fix']:
            self.stdout.write(f'{len(problemas)} inconsistência(s). Rode com --fix para corrigir.')
            return

        corrigidos = hierarchy.repair(usuario)
        self.stdout.write(self.style.SUCCESS(f'✅ {corrigidos} pai(s) renumerado(s)'))
