# apps/board/notify.py

"""
Atalhos para a camada CRUD notificar o board após uma mutação

As views CRUD são síncronas (rodam em thread sob ASGI); o fan-out é
executado no event loop principal via async_to_sync, o mesmo loop dos
consumers, então o registro nunca é tocado fora dele.
"""

from asgiref.sync import async_to_sync

from .events import CommentAdded, TaskCreated, TaskDeleted, TaskUpdated
from .gateway import board_gateways


def notificar_board(evento, board=None, directory=None):
    """
    Envia o evento para todas as conexões do board
    Retorna quantas conexões receberam
    """
    gateway = (directory or board_gateways).get(board)
    return async_to_sync(gateway.broadcast)(evento)


def task_created(task_id, board=None, directory=None, **extra):
    return notificar_board(TaskCreated(task_id=task_id, extra=extra), board=board, directory=directory)


def task_updated(task_id, changes=None, board=None, directory=None, **extra):
    return notificar_board(TaskUpdated(task_id=task_id, changes=changes, extra=extra),
                           board=board, directory=directory)


def task_deleted(task_id, board=None, directory=None, **extra):
    return notificar_board(TaskDeleted(task_id=task_id, extra=extra), board=board, directory=directory)


def comment_added(task_id, comment_id, board=None, directory=None, **extra):
    return notificar_board(CommentAdded(task_id=task_id, comment_id=comment_id, extra=extra),
                           board=board, directory=directory)
