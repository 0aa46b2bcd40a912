# apps/board/relay.py

import asyncio
import json
import logging
from typing import Any, Mapping, Optional, Union

from .events import BoardEvent, parse_event
from .registry import ConnectionRegistry, agora_ms

logger = logging.getLogger(__name__)


class BroadcastRelay:
    """
    Fan-out de eventos para todas as conexões de um board

    Entrega best-effort: uma conexão que falha (ou estoura o timeout de
    envio) é removida do registro e o fan-out segue para as demais.
    Nenhuma falha de envio é propagada para quem chamou.
    """

    def __init__(self, registry: ConnectionRegistry, send_timeout: Optional[float] = 5.0):
        self.registry = registry
        self.send_timeout = send_timeout or None

    async def broadcast(self, event: Union[BoardEvent, Mapping[str, Any]]) -> int:
        """
        Carimba o timestamp do relay, serializa uma vez e envia para cada
        conexão do snapshot atual. Retorna quantas entregas deram certo.
        """
        event = parse_event(event)
        message = json.dumps(event.to_payload(timestamp=agora_ms()))

        entregues = 0
        for connection, info in self.registry.for_each():
            if await self._deliver(connection, message, info.identity):
                entregues += 1
            else:
                self.evict(connection, info.identity)

        logger.debug(f"📣 Evento {event.type or 'desconhecido'} entregue para {entregues} conexão(ões)")
        return entregues

    async def send(self, connection, event: Union[BoardEvent, Mapping[str, Any]],
                   evict: bool = True, stamp: bool = False) -> bool:
        """
        Envio direto para uma conexão (boas-vindas, pong)
        Com evict=True a conexão é removida se o envio falhar
        """
        event = parse_event(event)
        info = self.registry.get(connection)
        identity = info.identity if info else 'desconhecido'

        payload = event.to_payload(timestamp=agora_ms() if stamp else None)
        ok = await self._deliver(connection, json.dumps(payload), identity)
        if not ok and evict:
            self.evict(connection, identity)
        return ok

    def evict(self, connection, identity: str = 'desconhecido') -> None:
        if self.registry.remove(connection):
            logger.info(f"🧹 Conexão de {identity} removida após falha de envio")

    async def _deliver(self, connection, message: str, identity: str) -> bool:
        try:
            if self.send_timeout:
                await asyncio.wait_for(connection.send(text_data=message), timeout=self.send_timeout)
            else:
                await connection.send(text_data=message)
            return True
        except asyncio.TimeoutError:
            logger.warning(f"⏱️ Timeout enviando para {identity}")
        except Exception as e:
            logger.warning(f"❌ Falha enviando para {identity}: {str(e)}")
        return False
