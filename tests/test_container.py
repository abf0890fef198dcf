"""Tests for container wiring."""

from studio_booking.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.booking_service is not None
    assert container.moderation_service is not None
    assert container.booking_service.max_attempts == settings.booking_update_attempts
    assert (
        container.booking_service.assignment_service is container.assignment_service
    )
    assert (
        container.content_service.category_repository
        is container.category_service.repository
    )
