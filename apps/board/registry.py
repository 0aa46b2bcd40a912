# apps/board/registry.py

import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple

from django.utils import timezone


class DuplicateConnection(Exception):
    """O mesmo transporte foi registrado duas vezes no board"""


def agora_ms() -> int:
    """Timestamp atual em milissegundos desde epoch"""
    return int(timezone.now().timestamp() * 1000)


@dataclass
class ConnectionInfo:
    """Metadados de uma conexão viva"""

    identity: str
    joined_at: int
    last_seen: int


class ConnectionRegistry:
    """
    Registro em memória das conexões vivas de um board

    Chaves são os próprios handles de transporte (opacos para o registro).
    Toda leitura e escrita passa pelo mesmo lock, e a iteração é feita
    sobre uma cópia, então remover durante um broadcast é seguro.
    """

    def __init__(self):
        self._entries: Dict[Any, ConnectionInfo] = {}
        self._lock = threading.Lock()

    def add(self, connection, identity: str) -> ConnectionInfo:
        """
        Registra uma conexão recém-aberta
        Lança DuplicateConnection se o handle já estiver presente
        """
        now = agora_ms()
        with self._lock:
            if connection in self._entries:
                raise DuplicateConnection(f'Conexão já registrada para {identity}')
            info = ConnectionInfo(identity=identity, joined_at=now, last_seen=now)
            self._entries[connection] = info
        return info

    def remove(self, connection) -> bool:
        """
        Remove a conexão - idempotente
        Retorna True apenas se a conexão ainda estava registrada
        """
        with self._lock:
            return self._entries.pop(connection, None) is not None

    def touch(self, connection) -> None:
        """Atualiza last_seen (ignora conexões desconhecidas)"""
        with self._lock:
            info = self._entries.get(connection)
            if info is not None:
                info.last_seen = agora_ms()

    def get(self, connection):
        with self._lock:
            return self._entries.get(connection)

    def snapshot(self) -> List[Tuple[Any, ConnectionInfo]]:
        """Cópia consistente das entradas atuais"""
        with self._lock:
            return list(self._entries.items())

    def for_each(self) -> Iterator[Tuple[Any, ConnectionInfo]]:
        """
        Iterador sobre um snapshot tirado no momento da chamada
        O registro pode ser alterado (remove) enquanto a iteração acontece
        """
        return iter(self.snapshot())

    __iter__ = for_each

    def identities(self) -> List[str]:
        with self._lock:
            return [info.identity for info in self._entries.values()]

    def idle_since(self, cutoff_ms: int) -> List[Any]:
        """Conexões sem atividade desde cutoff_ms"""
        with self._lock:
            return [
                connection for connection, info in self._entries.items()
                if info.last_seen < cutoff_ms
            ]

    def __contains__(self, connection) -> bool:
        with self._lock:
            return connection in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
