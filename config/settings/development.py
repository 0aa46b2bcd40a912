# config/settings/development.py

import sys
from .base import *

# === DESENVOLVIMENTO ===

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# === LOGGING MAIS VERBOSO ===

LOGGING['handlers']['console']['level'] = 'DEBUG'
LOGGING['root']['level'] = 'DEBUG'
LOGGING['loggers']['apps']['level'] = 'DEBUG'

# === CONFIGURAÇÕES DE DESENVOLVIMENTO ===

# Envios lentos aparecem logo em desenvolvimento
RELAY_SEND_TIMEOUT = env('RELAY_SEND_TIMEOUT', default=2.0)

# Configurações para testes
if 'test' in sys.argv:
    # Desabilitar logs em testes
    LOGGING['handlers'] = {}
    LOGGING['loggers'] = {}
    LOGGING['root']['handlers'] = []

print("🚀 Configurações de DESENVOLVIMENTO carregadas")
print(f"📁 BASE_DIR: {BASE_DIR}")
print(f"🔑 DEBUG: {DEBUG}")
print(f"📡 Board padrão: {RELAY_DEFAULT_BOARD}")
