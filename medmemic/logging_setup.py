# FILE: medmemic/logging_setup.py

import logging

from medmemic.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level=None):
    """Configure root logging once per process; Streamlit reruns call this repeatedly."""
    root = logging.getLogger()
    if getattr(root, "_medmemic_configured", False):
        return
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=LOG_FORMAT)
    root._medmemic_configured = True
