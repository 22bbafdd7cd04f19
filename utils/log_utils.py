# utils/log_utils.py
import logging

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """basicConfig once per process (Streamlit re-runs page scripts on every interaction)."""
    root = logging.getLogger()
    if getattr(root, "_dashboard_configured", False):
        return
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=_FORMAT)
    root._dashboard_configured = True
