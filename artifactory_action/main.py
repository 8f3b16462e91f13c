"""Command line entrypoint."""

from __future__ import annotations

import logging
import sys

from pydantic import ValidationError

from .bootstrap import ServiceContainer
from .logging_config import configure_logging
from .modules.artifactdeploy.exceptions import DeployError
from .settings import get_settings

log = logging.getLogger(__name__)


def main() -> int:
    try:
        settings = get_settings()
    except ValidationError as exc:
        configure_logging()
        log.error("Invalid configuration: %s", exc)
        return 2
    configure_logging(settings.debug)
    container = None
    try:
        container = ServiceContainer(settings)
        container.deployer.deploy()
    except DeployError as exc:
        log.error("%s", exc, exc_info=settings.debug)
        return 1
    finally:
        if container is not None:
            container.close()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
