# apps/board/urls.py

from django.urls import re_path

from . import views
from .gateway import board_gateways

app_name = 'board'

urlpatterns = [
    # Requisições HTTP comuns nas rotas de WebSocket (sem Upgrade) -> 426
    re_path(r'^ws/?$', views.UpgradeRequiredView.as_view(), name='ws'),
    re_path(r'^api/ws/?$', views.UpgradeRequiredView.as_view(), name='api_ws'),
    re_path(r'^boards/(?P<board_name>[\w-]+)/ws/?$', views.UpgradeRequiredView.as_view(), name='board_ws'),

    # Broadcast interno (chamado pela camada CRUD)
    re_path(r'^broadcast/?$', views.BroadcastView.as_view(directory=board_gateways), name='broadcast'),
    re_path(r'^boards/(?P<board_name>[\w-]+)/broadcast/?$',
            views.BroadcastView.as_view(directory=board_gateways), name='board_broadcast'),

    # Monitoramento
    re_path(r'^boards/(?P<board_name>[\w-]+)/status/?$',
            views.BoardStatusView.as_view(directory=board_gateways), name='board_status'),
    re_path(r'^health/?$', views.HealthCheckView.as_view(directory=board_gateways), name='health'),
]
