# apps/__init__.py

"""
Task Board Relay - Aplicações Django

Este pacote contém as aplicações do sistema:
- board: registro de conexões, relay de broadcast e gateway WebSocket/HTTP
"""

__version__ = '0.1.0'
__author__ = 'Equipe Task Board'
