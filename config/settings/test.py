# config/settings/test.py

"""
Configurações usadas pelo pytest (pytest-django)
"""

from .base import *  # noqa: F403

SECRET_KEY = env('SECRET_KEY', default='test-secret-key-nao-usar-em-producao')  # noqa: F405

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

# Testes controlam timeouts explicitamente
RELAY_DEFAULT_BOARD = 'main'
RELAY_SEND_TIMEOUT = 1.0
RELAY_IDLE_TIMEOUT = 0.0
RELAY_URL = 'http://relay.testserver'

# Desabilitar logs em arquivo nos testes
LOGGING['handlers'].pop('file')  # noqa: F405
LOGGING['root']['handlers'] = ['console']  # noqa: F405
LOGGING['loggers']['django']['handlers'] = ['console']  # noqa: F405
LOGGING['loggers']['apps']['handlers'] = ['console']  # noqa: F405
