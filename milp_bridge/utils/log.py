"""Logging setup shared by the CLI and host processes"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"


def configure_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    kwargs = {"level": lvl, "format": LOG_FORMAT}
    if log_file:
        kwargs["filename"] = str(log_file)
    logging.basicConfig(**kwargs)
