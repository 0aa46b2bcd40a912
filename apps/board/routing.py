# apps/board/routing.py

from django.urls import re_path

from . import consumers
from .gateway import board_gateways

# Rotas WebSocket do relay
websocket_urlpatterns = [
    # Board padrão (RELAY_DEFAULT_BOARD)
    re_path(r'^ws/?$', consumers.BoardConsumer.as_asgi(directory=board_gateways)),
    re_path(r'^api/ws/?$', consumers.BoardConsumer.as_asgi(directory=board_gateways)),

    # Board específico
    re_path(r'^boards/(?P<board_name>[\w-]+)/ws/?$', consumers.BoardConsumer.as_asgi(directory=board_gateways)),
]
