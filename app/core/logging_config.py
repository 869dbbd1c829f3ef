import logging
import sys


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure application logging to stdout with timestamps, level and
    logger name.  Safe to call more than once.
    """
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # httpx logs every request at INFO; the nearby-search fan-out floods it
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger("app")
