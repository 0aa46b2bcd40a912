# apps/board/gateway.py

import asyncio
import logging
import threading
from typing import Dict, List, Optional

from django.conf import settings

from .events import parse_event
from .registry import ConnectionRegistry, agora_ms
from .relay import BroadcastRelay

logger = logging.getLogger(__name__)


class BoardGateway:
    """
    Ponto único de um board: dono do registro de conexões e do relay

    Existe uma instância por nome de board durante a vida do processo
    (ver BoardGatewayDirectory). O consumer WebSocket usa join/leave/touch
    e o endpoint HTTP de broadcast usa publish.
    """

    def __init__(self, name: str, send_timeout: Optional[float] = None,
                 idle_timeout: Optional[float] = None, sweep_interval: Optional[float] = None):
        self.name = name
        self.registry = ConnectionRegistry()
        self.relay = BroadcastRelay(
            self.registry,
            send_timeout=settings.RELAY_SEND_TIMEOUT if send_timeout is None else send_timeout,
        )
        self.idle_timeout = settings.RELAY_IDLE_TIMEOUT if idle_timeout is None else idle_timeout
        self.sweep_interval = settings.RELAY_HEARTBEAT_INTERVAL if sweep_interval is None else sweep_interval
        self._pending = set()
        self._sweeper = None

    def __repr__(self):
        return f'<BoardGateway {self.name} conexões={len(self.registry)}>'

    # === Ciclo de vida das conexões ===

    def join(self, connection, identity: str):
        """Registra a conexão (DuplicateConnection sobe para o consumer)"""
        info = self.registry.add(connection, identity)
        logger.info(f"✅ {identity} entrou no board {self.name} ({len(self.registry)} conectados)")
        self._ensure_sweeper()
        return info

    def leave(self, connection) -> None:
        info = self.registry.get(connection)
        if self.registry.remove(connection) and info is not None:
            logger.info(f"🔌 {info.identity} saiu do board {self.name} ({len(self.registry)} conectados)")

    def touch(self, connection) -> None:
        self.registry.touch(connection)

    # === Broadcast ===

    async def broadcast(self, event) -> int:
        """Fan-out completo, aguardado até o fim"""
        return await self.relay.broadcast(event)

    async def send(self, connection, event, evict: bool = True, stamp: bool = False) -> bool:
        return await self.relay.send(connection, event, evict=evict, stamp=stamp)

    def publish(self, event) -> asyncio.Task:
        """
        Agenda o fan-out no loop atual e retorna sem esperar
        Usado pelo endpoint /broadcast (fire-and-forget)
        """
        event = parse_event(event)
        task = asyncio.get_running_loop().create_task(self.relay.broadcast(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Aguarda todos os fan-outs agendados por publish"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # === Limpeza de conexões ociosas ===

    async def sweep_idle(self) -> List:
        """
        Fecha e remove conexões sem atividade há mais de idle_timeout
        Retorna as conexões removidas
        """
        if not self.idle_timeout:
            return []

        cutoff = agora_ms() - int(self.idle_timeout * 1000)
        removidas = []
        for connection in self.registry.idle_since(cutoff):
            info = self.registry.get(connection)
            if info is None or not self.registry.remove(connection):
                continue
            removidas.append(connection)
            logger.info(f"💤 Conexão ociosa de {info.identity} encerrada no board {self.name}")
            try:
                await connection.close()
            except Exception as e:
                logger.warning(f"⚠️ Erro fechando conexão ociosa: {str(e)}")
        return removidas

    def _ensure_sweeper(self) -> None:
        if not self.idle_timeout or not self.sweep_interval:
            return
        if self._sweeper is not None and not self._sweeper.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._sweeper = loop.create_task(self._sweep_loop())

    async def _sweep_loop(self) -> None:
        while len(self.registry):
            await asyncio.sleep(self.sweep_interval)
            await self.sweep_idle()

    async def close(self) -> None:
        """Para o sweeper e espera fan-outs pendentes"""
        if self._sweeper is not None:
            self._sweeper.cancel()
            try:
                await self._sweeper
            except asyncio.CancelledError:
                pass
            self._sweeper = None
        await self.drain()

    def status(self) -> Dict:
        return {
            'board': self.name,
            'connections': len(self.registry),
            'agents': sorted(self.registry.identities()),
        }


class BoardGatewayDirectory:
    """
    Cache de gateways indexado pelo nome do board
    Garante um único registro por board durante a vida do processo
    """

    def __init__(self, **gateway_options):
        self._gateways: Dict[str, BoardGateway] = {}
        self._lock = threading.Lock()
        self.gateway_options = gateway_options

    def get(self, name: Optional[str] = None) -> BoardGateway:
        name = name or settings.RELAY_DEFAULT_BOARD
        with self._lock:
            gateway = self._gateways.get(name)
            if gateway is None:
                gateway = BoardGateway(name, **self.gateway_options)
                self._gateways[name] = gateway
                logger.debug(f"🗂️ Gateway criado para o board {name}")
            return gateway

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._gateways)

    def status(self) -> Dict[str, int]:
        with self._lock:
            gateways = list(self._gateways.values())
        return {gateway.name: len(gateway.registry) for gateway in gateways}

    def clear(self) -> None:
        with self._lock:
            self._gateways.clear()

    def __contains__(self, name) -> bool:
        with self._lock:
            return name in self._gateways


# Instância usada pelas rotas do projeto (passada explicitamente a consumers e views)
board_gateways = BoardGatewayDirectory()
