from __future__ import annotations

import logging
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)

PING_HOSTS = ("google.com", "8.8.8.8")


def is_online(hosts: Sequence[str] = PING_HOSTS) -> bool:
    """Best-effort online check: any host answering one ping is enough."""

    for host in hosts:
        r = run_cmd(["ping", "-c", "1", "-W", "2", host], check=False)
        if r.ok:
            return True
        logger.debug("No reply from %s", host)
    return False
