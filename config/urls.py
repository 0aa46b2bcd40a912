# config/urls.py

from django.urls import path, include

urlpatterns = [
    # Gateway do board (rotas na raiz: /ws, /api/ws, /broadcast, /boards/<nome>/...)
    path('', include('apps.board.urls')),
]
