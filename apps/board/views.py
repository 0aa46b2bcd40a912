# apps/board/views.py

import json
import logging

from django.http import JsonResponse
from django.utils import timezone
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from apps import __version__
from .events import InvalidEvent, parse_event

logger = logging.getLogger(__name__)


class UpgradeRequiredView(View):
    """
    Rotas de WebSocket acessadas via HTTP comum
    Upgrades válidos são roteados pelo ASGI direto para o BoardConsumer
    """

    def get(self, request, board_name=None):
        response = JsonResponse({'error': 'Expected Upgrade: websocket'}, status=426)
        response['Upgrade'] = 'websocket'
        response['Connection'] = 'Upgrade'
        return response


class GatewayView(View):
    """Base das views que falam com o diretório de gateways"""

    directory = None


@method_decorator(csrf_exempt, name='dispatch')  # Chamado internamente pela camada CRUD
class BroadcastView(GatewayView):
    """
    Recebe um evento da camada CRUD e agenda o fan-out
    Responde assim que o fan-out é agendado, sem esperar a entrega
    """

    http_method_names = ['post']

    async def post(self, request, board_name=None):
        try:
            event = parse_event(json.loads(request.body))
        except (json.JSONDecodeError, UnicodeDecodeError, InvalidEvent) as e:
            logger.warning(f"❌ Broadcast rejeitado - payload inválido: {str(e)}")
            return JsonResponse({'success': False, 'error': 'Payload deve ser um objeto JSON'}, status=400)

        gateway = self.directory.get(board_name)
        gateway.publish(event)

        return JsonResponse({'success': True})


class BoardStatusView(GatewayView):
    """
    Conexões vivas de um board
    """

    async def get(self, request, board_name=None):
        # Não cria gateway só para consultar
        if board_name not in self.directory:
            return JsonResponse({'board': board_name, 'connections': 0, 'agents': []})
        return JsonResponse(self.directory.get(board_name).status())


class HealthCheckView(GatewayView):
    """
    Health check para monitoramento
    """

    async def get(self, request):
        return JsonResponse({
            'status': 'healthy',
            'boards': self.directory.status(),
            'timestamp': timezone.now().isoformat(),
            'version': __version__,
        })
