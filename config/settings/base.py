# config/settings/base.py

import environ
from pathlib import Path

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Configuração do django-environ
env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, []),
    RELAY_SEND_TIMEOUT=(float, 5.0),
    RELAY_IDLE_TIMEOUT=(float, 0.0),
    RELAY_HEARTBEAT_INTERVAL=(float, 30.0),
    RELAY_CLIENT_TIMEOUT=(float, 5.0),
)

# Lê o arquivo .env se existir
environ.Env.read_env(BASE_DIR / '.env')

# === CONFIGURAÇÕES BÁSICAS ===

SECRET_KEY = env('SECRET_KEY', default='django-insecure-CHANGE-ME-IN-PRODUCTION')

DEBUG = env('DEBUG')

ALLOWED_HOSTS = env('ALLOWED_HOSTS')

# === APLICAÇÕES ===

THIRD_PARTY_APPS = [
    # Async/WebSocket
    'channels',
]

LOCAL_APPS = [
    'apps.board',
]

# daphne primeiro para assumir o runserver (ASGI + WebSocket)
INSTALLED_APPS = ['daphne'] + THIRD_PARTY_APPS + LOCAL_APPS

# === MIDDLEWARE ===

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
]

ROOT_URLCONF = 'config.urls'

# Rotas aceitam com ou sem barra final (/ws, /broadcast)
APPEND_SLASH = False

# === ASGI ===

ASGI_APPLICATION = 'config.asgi.application'

# === BANCO DE DADOS ===

# O relay é só memória; o banco pertence à camada CRUD
DATABASES = {}

# === INTERNACIONALIZAÇÃO ===

LANGUAGE_CODE = 'pt-br'
TIME_ZONE = 'America/Sao_Paulo'
USE_I18N = True
USE_TZ = True

# === LOGGING ===

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'file': {
            'level': 'INFO',
            'class': 'logging.FileHandler',
            'filename': BASE_DIR / 'logs' / 'relay.log',
            'formatter': 'verbose',
        },
        'console': {
            'level': 'INFO',
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console', 'file'],
        'level': 'INFO',
    },
    'loggers': {
        'django': {
            'handlers': ['file'],
            'level': 'INFO',
            'propagate': False,
        },
        'apps': {
            'handlers': ['console', 'file'],
            'level': 'INFO',
            'propagate': False,
        },
    },
}

# Criar pasta de logs se não existir
(BASE_DIR / 'logs').mkdir(exist_ok=True)

# === CONFIGURAÇÕES DO RELAY ===

# Board usado por /ws, /api/ws e /broadcast
RELAY_DEFAULT_BOARD = env('RELAY_DEFAULT_BOARD', default='main')

# Timeout de cada envio individual no fan-out (0 desliga)
RELAY_SEND_TIMEOUT = env('RELAY_SEND_TIMEOUT')

# Conexões sem nenhum frame por mais que isso são encerradas (0 desliga)
RELAY_IDLE_TIMEOUT = env('RELAY_IDLE_TIMEOUT')

# Intervalo da varredura de ociosos
RELAY_HEARTBEAT_INTERVAL = env('RELAY_HEARTBEAT_INTERVAL')  # segundos

# Cliente HTTP usado por CRUDs em outro processo
RELAY_URL = env('RELAY_URL', default='http://localhost:8000')
RELAY_CLIENT_TIMEOUT = env('RELAY_CLIENT_TIMEOUT')
