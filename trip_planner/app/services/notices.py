"""User-facing notices (toasts/banners) raised by itinerary operations."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    """Human-readable notification for the UI shell."""

    level: Literal["success", "warning", "error"]
    title: str
    message: str


Notifier = Callable[[Notice], None]


def log_notice(notice: Notice) -> None:
    """Default notifier - write the notice to the log."""
    if notice.level == "success":
        logger.info(f"{notice.title}: {notice.message}")
    else:
        logger.warning(f"{notice.title}: {notice.message}")
