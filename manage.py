#!/usr/bin/env python
"""
Django's command-line utility for administrative tasks.

Task Board Relay - broadcast em tempo real do Task Board
"""

import os
import sys


def main():
    """Run administrative tasks."""

    # Configuração padrão para desenvolvimento
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    # Atalho: python manage.py serve -> runserver ASGI (daphne) em 0.0.0.0:8000
    if len(sys.argv) > 1 and sys.argv[1] == 'serve':
        print("🚀 Subindo relay em 0.0.0.0:8000 (WebSocket em /ws)")
        sys.argv = [sys.argv[0], 'runserver', '0.0.0.0:8000'] + sys.argv[2:]

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
