# idqr/utils/logging.py
import logging


def setup_logger(level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger("idqr")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
