from __future__ import annotations

import logging


def configure_envsel_logging(*, level: int = logging.INFO) -> None:
    """
    Configure a minimal console logger for envsel.

    Notes:
        - This is opt-in (library code must not call logging.basicConfig()).
        - The handler is only attached if neither the root logger nor the "envsel" logger has handlers.
    """
    root = logging.getLogger()
    envsel_logger = logging.getLogger("envsel")

    # If the user already configured logging, don't interfere.
    if root.handlers or envsel_logger.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    envsel_logger.addHandler(handler)
    envsel_logger.setLevel(level)
    envsel_logger.propagate = False


__all__ = ["configure_envsel_logging"]
