"""Run with: python -m lead_qualifier"""
import logging

import uvicorn

from .api import app
from .core.config import get_settings

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
