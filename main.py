"""
main.py: Assessment Take API server entry point
"""

import os
import sys
import logging

# ── package path (must stay at the very top) ─────────────────────────────────
_BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if _BASE_DIR not in sys.path:
    sys.path.insert(0, _BASE_DIR)

from config import BASE_DIR, LOG_FILE, DEFAULT_HOST, DEFAULT_PORT

# ── logging ──────────────────────────────────────────────────────────────────
try:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.FileHandler(LOG_FILE, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )
except PermissionError:
    # log file locked or read-only: console only
    logging.basicConfig(level=logging.INFO)

logger = logging.getLogger(__name__)


def run(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    import uvicorn
    from api.app import create_app

    logger.info(f"Uvicorn server starting - {host}:{port}")
    app = create_app()
    uvicorn.run(app, host=host, port=port, log_level="warning")


if __name__ == "__main__":
    logger.info("=== Assessment Take server started ===")
    os.chdir(BASE_DIR)
    try:
        run()
    except KeyboardInterrupt:
        logger.info("Stopped by user.")
