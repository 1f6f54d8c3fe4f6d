# =============================================================================
# core/services/application_service.py - Application Business Logic
# =============================================================================
# Handles application CRUD operations and listing.
# Separates HTTP concerns from store/query logic.
#
# Every method returns a ServiceResponse and never raises: unexpected
# failures are logged and turned into a generic internal-error outcome so
# no internal detail reaches the client.
# =============================================================================

import logging
from http import HTTPStatus

from core.models.application import (
    ApplicationCreate,
    ApplicationUpdate,
    ApplicationsQuery,
)
from core.models.service_response import ServiceResponse
from lib.application_store import ApplicationStore
from lib.pagination import paginate

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Application not found"


class ApplicationService:
    """
    Service for application management operations.

    Provides a clean interface between API routes and the store.
    The store is injected so each app (or test) owns its own.
    """

    def __init__(self, store: ApplicationStore):
        self.store = store

    def find_all_applications(self, query: ApplicationsQuery | None = None) -> ServiceResponse:
        """
        List applications with filtering, sorting and pagination.

        Args:
            query: Validated list parameters (defaults if None)

        Returns:
            ServiceResponse with an ApplicationsPage
        """
        try:
            page = paginate(self.store.find_all(), query or ApplicationsQuery())
            return ServiceResponse.succeed("Success", page)

        except Exception as e:
            logger.error(f"Error finding all applications: {e}")
            return ServiceResponse.internal_error(
                "An error occurred while retrieving applications."
            )

    def find_application_by_id(self, application_id: str) -> ServiceResponse:
        """
        Get a single application.

        Returns:
            ServiceResponse with the Application, or a not-found outcome
        """
        try:
            application = self.store.find_by_id(application_id)
            if application is None:
                return ServiceResponse.not_found(NOT_FOUND_MESSAGE)

            return ServiceResponse.succeed("Application found", application)

        except Exception as e:
            logger.error(f"Error finding application with id {application_id}: {e}")
            return ServiceResponse.internal_error(
                "An error occurred while finding application."
            )

    def create_application(self, payload: ApplicationCreate) -> ServiceResponse:
        """
        Create a new application with status in_review.

        Returns:
            ServiceResponse (201) with the created Application
        """
        try:
            application = self.store.create(payload)
            return ServiceResponse.succeed(
                "Application created",
                application,
                status_code=HTTPStatus.CREATED,
            )

        except Exception as e:
            logger.error(f"Error creating application: {e}")
            return ServiceResponse.internal_error(
                "An error occurred while creating the application."
            )

    def update_application(
        self,
        application_id: str,
        patch: ApplicationUpdate,
    ) -> ServiceResponse:
        """
        Partially update an application.

        Only the fields set on patch overwrite the stored record.

        Returns:
            ServiceResponse with the updated Application, or not-found
        """
        try:
            # Existence check first: a missing id is a normal outcome
            if self.store.find_by_id(application_id) is None:
                return ServiceResponse.not_found(NOT_FOUND_MESSAGE)

            updated = self.store.update(application_id, patch.changes())
            if updated is None:
                # Deleted between the check and the update
                return ServiceResponse.not_found(NOT_FOUND_MESSAGE)

            return ServiceResponse.succeed("Application updated", updated)

        except Exception as e:
            logger.error(f"Error updating application with id {application_id}: {e}")
            return ServiceResponse.internal_error(
                "An error occurred while updating the application."
            )

    def delete_application(self, application_id: str) -> ServiceResponse:
        """
        Delete an application.

        Returns:
            Empty ServiceResponse (204), or not-found
        """
        try:
            if self.store.find_by_id(application_id) is None:
                return ServiceResponse.not_found(NOT_FOUND_MESSAGE)

            if not self.store.delete(application_id):
                return ServiceResponse.not_found(NOT_FOUND_MESSAGE)

            return ServiceResponse.empty("Application deleted")

        except Exception as e:
            logger.error(f"Error deleting application with id {application_id}: {e}")
            return ServiceResponse.internal_error(
                "An error occurred while deleting the application."
            )
