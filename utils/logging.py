"""Logging setup shared by the API and the wizard engine.

Modules log through named stdlib loggers ("ConversationEngine", "WizardSession", ...);
this only installs the root handler once and quiets chatty client libraries.
"""
import logging
import sys

NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "pymongo")


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if root.handlers:
        return  # already configured, e.g. by uvicorn
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    root.setLevel(level.upper())
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
