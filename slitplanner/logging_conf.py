"""
Configuração de logging da aplicação
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> int:
    """
    Instala um único handler em stdout no logger raiz

    Um nível desconhecido cai para INFO e é registrado como aviso.

    Returns:
        Nível numérico efetivamente aplicado
    """
    numeric_level = logging.getLevelName(str(level).upper())
    invalid = not isinstance(numeric_level, int)
    if invalid:
        numeric_level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    # Reconfigurar (reload do uvicorn) não duplica a saída
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    if invalid:
        logging.getLogger(__name__).warning("Nível de log inválido %r, usando INFO", level)
    return numeric_level
