# apps/board/events.py

"""
Eventos trafegados pelo relay do board

Cada evento tem um discriminador `type`. Os tipos conhecidos viram
dataclasses; qualquer outro payload vira `Other` e é repassado sem
alteração, já que o relay só precisa carimbar o timestamp.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


class InvalidEvent(ValueError):
    """Payload que não é um objeto JSON"""


@dataclass
class BoardEvent:
    """Base dos eventos - `extra` guarda campos desconhecidos"""

    type = ''
    extra: Dict[str, Any] = field(default_factory=dict, kw_only=True)

    def fields(self) -> Dict[str, Any]:
        return {}

    def to_payload(self, timestamp: Optional[int] = None) -> Dict[str, Any]:
        payload = dict(self.extra)
        payload['type'] = self.type
        payload.update(self.fields())
        if timestamp is not None:
            payload['timestamp'] = timestamp
        return payload


@dataclass
class Connected(BoardEvent):
    type = 'connected'
    agent_id: str = 'anonymous'

    def fields(self):
        return {'agentId': self.agent_id}


@dataclass
class Pong(BoardEvent):
    type = 'pong'


@dataclass
class TaskCreated(BoardEvent):
    type = 'task_created'
    task_id: str = ''

    def fields(self):
        return {'taskId': self.task_id}


@dataclass
class TaskUpdated(BoardEvent):
    type = 'task_updated'
    task_id: str = ''
    changes: Optional[Dict[str, Any]] = None

    def fields(self):
        data = {'taskId': self.task_id}
        if self.changes is not None:
            data['changes'] = self.changes
        return data


@dataclass
class TaskDeleted(BoardEvent):
    type = 'task_deleted'
    task_id: str = ''

    def fields(self):
        return {'taskId': self.task_id}


@dataclass
class CommentAdded(BoardEvent):
    type = 'comment_added'
    task_id: str = ''
    comment_id: str = ''

    def fields(self):
        return {'taskId': self.task_id, 'commentId': self.comment_id}


@dataclass
class Other(BoardEvent):
    """Evento de tipo desconhecido (ou sem tipo) - repassado como veio"""

    raw: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self, timestamp=None):
        payload = dict(self.raw)
        if timestamp is not None:
            payload['timestamp'] = timestamp
        return payload


# type -> (classe, {campo do payload: atributo}, campos obrigatórios)
_VARIANTS = {
    'connected': (Connected, {'agentId': 'agent_id'}, ()),
    'pong': (Pong, {}, ()),
    'task_created': (TaskCreated, {'taskId': 'task_id'}, ('taskId',)),
    'task_updated': (TaskUpdated, {'taskId': 'task_id', 'changes': 'changes'}, ('taskId',)),
    'task_deleted': (TaskDeleted, {'taskId': 'task_id'}, ('taskId',)),
    'comment_added': (CommentAdded, {'taskId': 'task_id', 'commentId': 'comment_id'}, ('taskId',)),
}


def parse_event(data: Any) -> BoardEvent:
    """
    Converte um payload JSON já decodificado em evento
    Tipos desconhecidos ou incompletos viram Other
    """
    if isinstance(data, BoardEvent):
        return data
    if not isinstance(data, Mapping):
        raise InvalidEvent(f'Evento deve ser um objeto JSON, recebido {type(data).__name__}')

    # type pode vir como objeto ou lista: só strings são tipos conhecidos
    kind = data.get('type')
    variant = _VARIANTS.get(kind) if isinstance(kind, str) else None
    if variant is None:
        return Other(raw=dict(data))

    cls, mapping, required = variant
    if any(data.get(key) is None for key in required):
        return Other(raw=dict(data))

    kwargs = {attr: data[key] for key, attr in mapping.items() if key in data}
    extra = {
        key: value for key, value in data.items()
        if key not in mapping and key not in ('type', 'timestamp')
    }
    return cls(extra=extra, **kwargs)
