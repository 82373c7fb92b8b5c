import logging

logger = logging.getLogger(__name__)


class HandlerBase:
    """Common scope logging for provisioning handlers."""

    def __init__(self, name: str) -> None:
        self.name = name

    def scope_started(self) -> None:
        logger.info(f"{self.name}: Code execution scope started")

    def scope_ended(self) -> None:
        logger.info(f"{self.name}: Code execution scope ended")
