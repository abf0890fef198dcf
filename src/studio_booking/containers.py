"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from studio_booking.adapters.supabase_audit_repository import SupabaseAuditRepository
from studio_booking.adapters.supabase_booking_repository import (
    SupabaseBookingRepository,
)
from studio_booking.adapters.supabase_category_repository import (
    SupabaseCategoryRepository,
)
from studio_booking.adapters.supabase_content_repository import (
    SupabaseContentRepository,
)
from studio_booking.adapters.supabase_user_repository import SupabaseUserRepository
from studio_booking.config import Settings
from studio_booking.services.admin import AdminService
from studio_booking.services.assignment import AssignmentService
from studio_booking.services.audit import AuditService
from studio_booking.services.bookings import BookingService
from studio_booking.services.categories import CategoryService
from studio_booking.services.content import ContentService
from studio_booking.services.moderation import ModerationService
from studio_booking.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    booking_service: BookingService
    assignment_service: AssignmentService
    content_service: ContentService
    category_service: CategoryService
    moderation_service: ModerationService
    admin_service: AdminService
    audit_service: AuditService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    booking_repository = SupabaseBookingRepository(supabase_client)
    content_repository = SupabaseContentRepository(supabase_client)
    category_repository = SupabaseCategoryRepository(supabase_client)
    audit_service = AuditService(SupabaseAuditRepository(supabase_client))
    user_service = UserService(user_repository, audit_service)
    assignment_service = AssignmentService(
        repository=booking_repository,
        user_service=user_service,
        audit_service=audit_service,
    )
    booking_service = BookingService(
        repository=booking_repository,
        user_service=user_service,
        assignment_service=assignment_service,
        max_attempts=resolved_settings.booking_update_attempts,
    )
    content_service = ContentService(content_repository, category_repository)
    category_service = CategoryService(
        repository=category_repository,
        content_repository=content_repository,
        audit_service=audit_service,
    )
    moderation_service = ModerationService(
        repository=content_repository,
        audit_service=audit_service,
    )
    admin_service = AdminService(
        user_repository=user_repository,
        booking_repository=booking_repository,
        content_repository=content_repository,
        audit_service=audit_service,
    )

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        booking_service=booking_service,
        assignment_service=assignment_service,
        content_service=content_service,
        category_service=category_service,
        moderation_service=moderation_service,
        admin_service=admin_service,
        audit_service=audit_service,
    )
