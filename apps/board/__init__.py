# apps/board/__init__.py

"""
Board - Relay em tempo real do Task Board

Funcionalidades:
- Registro em memória das conexões WebSocket de cada board
- Broadcast de eventos (task_created, task_updated, ...) para todos os clientes
- Heartbeat ping/pong
- Endpoint interno /broadcast para a camada CRUD
"""
