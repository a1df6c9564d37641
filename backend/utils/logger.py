"""
Centralized logging for the Inframe canvas agent.

Usage:
    from utils.logger import logger

    logger.info("This is an info message")
    logger.error("This is an error message")
"""

import logging

# Configure logging once
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Create a single logger instance to be imported everywhere
logger = logging.getLogger("inframe")


def clip(text: object, limit: int = 500) -> str:
    """Shorten model output or payload dumps before they hit the log."""
    text = str(text)
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... [{len(text) - limit} more chars]"
