import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_HANDLER_NAME = "stockcontrol"


def configure_logging(level: str = "INFO") -> None:
    """Instalar un único handler de consola en el logger raíz (idempotente)"""
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def mask_code(codigo: str) -> str:
    """Ocultar un código de acceso dejando visibles los dos últimos caracteres"""
    if not codigo:
        return ""
    visible = codigo[-2:]
    return "*" * (len(codigo) - len(visible)) + visible
