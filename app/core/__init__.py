"""
Core Application - Infrastructure & Base Classes

Generic building blocks shared by every domain app. Nothing here knows
about posts, friends or conversations.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - UUIDPrimaryKeyMixin: UUID as primary key

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError, NotFoundError, PermissionDeniedError,
      ConflictError, ExternalServiceError

API plumbing:
    - core.exception_handler.api_exception_handler: DRF exception handler
    - core.pagination.OffsetLimitPagination: offset/limit pagination

Validators (import from core.validators):
    - validate_file_size, validate_content_type, validate_email_domain

Views (import from core.views):
    - health_check: Database and cache status
"""
