# rpcschema/log.py
import logging


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    logger = logging.getLogger("rpcschema")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
