# src/canoe_paddle/core/protocol/errors.py
"""Erros do protocolo de coordenação main/paddle."""


class ProtocolError(Exception):
    """Erro base do protocolo."""


class SentinelAlreadyWrittenError(ProtocolError):
    """Tentativa de reescrever uma sentinela write-once."""


class ProtocolTimeoutError(ProtocolError):
    """Loop de polling excedeu o prazo sem observar a sentinela esperada."""
