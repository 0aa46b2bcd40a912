# apps/board/management/commands/broadcast_event.py

import json

from django.core.management.base import BaseCommand, CommandError

from apps.board.client import RelayClient


class Command(BaseCommand):
    help = 'Publica um evento JSON em um relay em execução (POST /broadcast)'

    def add_arguments(self, parser):
        parser.add_argument('evento', help='Evento JSON, ex: \'{"type": "task_created", "taskId": "abc"}\'')
        parser.add_argument('--board', default=None, help='Nome do board (padrão: RELAY_DEFAULT_BOARD)')
        parser.add_argument('--url', default=None, help='URL base do relay (padrão: RELAY_URL)')

    def handle(self, *args, **options):
        try:
            evento = json.loads(options['evento'])
        except json.JSONDecodeError as e:
            raise CommandError(f'JSON inválido: {e}')

        try:
            client = RelayClient(base_url=options['url'])
            ok = client.broadcast(evento, board=options['board'])
        except ValueError as e:
            raise CommandError(str(e))

        if not ok:
            raise CommandError('❌ Relay não confirmou o broadcast')

        self.stdout.write(self.style.SUCCESS('✅ Evento publicado'))
