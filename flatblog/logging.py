from sys import stderr
import logging

CONFIGURED = False


def configure_logging(level: str = "INFO"):
    """Configure our logging - to stderr."""
    global CONFIGURED
    if not CONFIGURED:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)-8s %(name)-35s - %(message)s",
            stream=stderr,
        )
    CONFIGURED = True
