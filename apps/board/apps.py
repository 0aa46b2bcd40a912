# apps/board/apps.py

import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class BoardConfig(AppConfig):
    """Configuração da app Board"""

    name = 'apps.board'
    verbose_name = 'Board - Relay em tempo real'

    def ready(self):
        """
        Inicialização da app
        """
        idle = settings.RELAY_IDLE_TIMEOUT
        logger.info(
            f"🔌 Board App inicializada - board padrão '{settings.RELAY_DEFAULT_BOARD}', "
            f"timeout de envio {settings.RELAY_SEND_TIMEOUT}s, "
            f"limpeza de ociosos {'%ss' % idle if idle else 'desligada'}"
        )
