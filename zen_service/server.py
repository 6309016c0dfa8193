"""Process entry point: validate configuration, then serve with uvicorn."""

from __future__ import annotations

import logging
import sys

import uvicorn
from pydantic import ValidationError

from zen_service.core.config import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = get_settings()
    except ValidationError as exc:
        logger.error("Invalid configuration, not starting:\n%s", exc)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    host, port = settings.bind()
    logger.info("Binding %s:%d with %d worker(s)", host, port, settings.workers)

    uvicorn.run(
        "zen_service.api.main:create_app",
        factory=True,
        host=host,
        port=port,
        workers=settings.workers,
        log_level=settings.log_level.lower(),
    )
