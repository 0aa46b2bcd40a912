# apps/board/client.py

"""
Cliente HTTP do relay para uma camada CRUD em outro processo

Faz POST no endpoint interno /broadcast. Falhas de rede são apenas
logadas: uma mutação já persistida não pode falhar por causa do relay.
"""

import logging
from typing import Any, Mapping, Optional, Union

import httpx
from django.conf import settings

from .events import BoardEvent, parse_event

logger = logging.getLogger(__name__)


class RelayClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        self.base_url = (base_url or settings.RELAY_URL or '').rstrip('/')
        self.timeout = timeout or float(settings.RELAY_CLIENT_TIMEOUT)
        self.transport = transport

        if not self.base_url:
            raise ValueError('URL do relay não configurada (RELAY_URL)')

    def broadcast_url(self, board: Optional[str] = None) -> str:
        if board:
            return f'{self.base_url}/boards/{board}/broadcast'
        return f'{self.base_url}/broadcast'

    def broadcast(self, event: Union[BoardEvent, Mapping[str, Any]], board: Optional[str] = None) -> bool:
        """
        Publica o evento no relay
        Retorna True se o relay confirmou com {"success": true}
        """
        payload = parse_event(event).to_payload()
        url = self.broadcast_url(board)

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                resp = client.post(url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"❌ Relay indisponível em {url}: {str(e)}")
            return False

        if resp.status_code != 200:
            logger.error(f"❌ Relay respondeu {resp.status_code}: {resp.text}")
            return False

        try:
            return resp.json().get('success') is True
        except ValueError:
            logger.error(f"❌ Resposta inválida do relay: {resp.text}")
            return False
