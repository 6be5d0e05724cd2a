"""Root logger setup, called once from the app lifespan."""

import logging


def configure_logging(level: str = "INFO", *, force: bool = False) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        force=force,
    )
