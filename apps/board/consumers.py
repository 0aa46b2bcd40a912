# apps/board/consumers.py

import json
import logging
from urllib.parse import parse_qs

from channels.generic.websocket import AsyncWebsocketConsumer
from django.conf import settings

from .events import Connected, Pong
from .gateway import board_gateways
from .registry import DuplicateConnection

logger = logging.getLogger(__name__)

ANONYMOUS = 'anonymous'


class BoardConsumer(AsyncWebsocketConsumer):
    """
    Consumer WebSocket de uma conexão com o board

    Ciclo de vida:
    - connect: aceita, registra no gateway do board e envia `connected`
    - receive: responde `ping` com `pong`, demais tipos são ignorados
    - disconnect: remove a conexão do registro

    O broadcast é unidirecional (relay -> cliente) e não passa por aqui.
    """

    def __init__(self, *args, directory=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.directory = directory or board_gateways
        self.gateway = None
        self.agent_id = ANONYMOUS

    async def connect(self):
        """
        Handshake: extrai a identidade da query string e registra a conexão
        O envio de boas-vindas é best-effort e não desfaz o registro
        """
        route_kwargs = self.scope.get('url_route', {}).get('kwargs', {})
        self.board_name = route_kwargs.get('board_name') or settings.RELAY_DEFAULT_BOARD
        self.agent_id = self.get_agent_id()
        self.gateway = self.directory.get(self.board_name)

        await self.accept()

        try:
            self.gateway.join(self, self.agent_id)
        except DuplicateConnection as e:
            logger.error(f"❌ Conexão duplicada rejeitada no board {self.board_name}: {str(e)}")
            self.gateway = None
            await self.close()
            return

        enviado = await self.gateway.send(self, Connected(agent_id=self.agent_id), evict=False, stamp=True)
        if not enviado:
            logger.warning(f"⚠️ Boas-vindas não entregue para {self.agent_id} - conexão mantida")

    async def disconnect(self, close_code):
        """
        Remove a conexão do registro (close ou erro de transporte)
        """
        if self.gateway is not None:
            self.gateway.leave(self)

        logger.debug(f"🔌 WebSocket desconectado - {self.agent_id} (código {close_code})")

    async def receive(self, text_data=None, bytes_data=None):
        """
        Recebe frames do cliente
        Frames malformados são apenas logados; a conexão continua aberta
        """
        if self.gateway is None:
            return

        self.gateway.touch(self)

        try:
            if text_data is None:
                text_data = bytes_data.decode('utf-8')
            data = json.loads(text_data)
        except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
            logger.warning(f"❌ JSON inválido recebido via WebSocket de {self.agent_id}")
            return

        if not isinstance(data, dict):
            return

        # Heartbeat
        if data.get('type') == 'ping':
            await self.gateway.send(self, Pong())

        # Outros tipos (cursor, digitando...) reservados para o futuro

    # === Métodos auxiliares ===

    def get_agent_id(self):
        """
        Identidade do cliente via ?agent_id= (padrão: anonymous)
        """
        query_string = self.scope.get('query_string', b'')
        if isinstance(query_string, bytes):
            query_string = query_string.decode('utf-8', errors='ignore')
        agent_id = parse_qs(query_string, keep_blank_values=True).get('agent_id', [''])[0]
        return agent_id or ANONYMOUS
