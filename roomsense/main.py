"""Session bootstrap and dependency wiring."""

from __future__ import annotations

from typing import Optional

from roomsense.controllers.session_controller import SessionController
from roomsense.repository.hotel_repository import HotelRepository
from roomsense.services.matching_service import RoomMatchingService
from roomsense.services.session_service import SessionService
from roomsense.utils.config import Settings, get_settings
from roomsense.utils.logger import configure_logging, get_logger


logger = get_logger(__name__)


def create_session(settings: Optional[Settings] = None) -> SessionController:
    """Build one session with its own catalog copy and explicit dependencies."""
    resolved_settings = settings or get_settings()
    configure_logging(resolved_settings)
    repository = HotelRepository(resolved_settings)
    matching_service = RoomMatchingService(
        repository=repository,
        settings=resolved_settings,
    )
    session = SessionService(
        repository=repository,
        matching_service=matching_service,
        settings=resolved_settings,
    )
    startup(repository)
    return SessionController(session)


def startup(repository: HotelRepository) -> None:
    """Load the demo catalog once per repository."""
    repository.seed_demo_hotel()
    logger.info("Session startup completed | floors=%s", repository.list_floor_numbers())
