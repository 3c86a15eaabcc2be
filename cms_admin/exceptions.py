"""
Custom Exception Classes for CMS Admin Plugins

Configuration errors are fatal and raised while a plugin registers its
fields, menus and assets. Validation failures are normally reported through
an ErrorCollection and only become exceptions on request.
"""

from typing import Any

from fastapi import status


class CMSAdminError(Exception):
    """Base exception class for all CMS admin plugin exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(CMSAdminError):
    """Raised when a field, menu or asset declaration is invalid"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details or {})


class MissingParameterError(ConfigurationError):
    """Raised when a required configuration key is absent"""

    def __init__(self, parameter: str, entity: str, missing: list[str] | None = None):
        super().__init__(
            message=f'Missing required parameter "{parameter}" for {entity}',
            details={"parameter": parameter, "entity": entity, "missing": missing or [parameter]},
        )
        self.parameter = parameter


class TemplateNotFoundError(ConfigurationError):
    """Raised when a field's template cannot be located"""

    def __init__(self, template_name: str):
        super().__init__(
            message=f"Template '{template_name}' not found",
            details={"template_name": template_name},
        )


class UnknownFieldTypeError(ConfigurationError):
    """Raised when creating a field of an unregistered type"""

    def __init__(self, field_type: str, available: list[str]):
        super().__init__(
            message=f"Unknown field type '{field_type}'",
            details={"field_type": field_type, "available": available},
        )


class UnknownPropertyError(ConfigurationError):
    """Raised when setting a property that was not declared at construction"""

    def __init__(self, key: str, field_type: str):
        super().__init__(
            message=f"Field '{field_type}' has no property '{key}'",
            details={"key": key, "field_type": field_type},
        )


# ============================================================================
# Validation Exceptions
# ============================================================================


class RegistrationValidationError(CMSAdminError):
    """Raised when a submitted registration form is rejected"""

    def __init__(self, message: str = "Registration failed validation", errors: dict[str, list[str]] | None = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"errors": errors or {}},
        )


# ============================================================================
# Admin Navigation Exceptions
# ============================================================================


class PageNotFoundError(CMSAdminError):
    """Raised when no admin page is registered under a slug"""

    def __init__(self, slug: str):
        super().__init__(
            message=f"Admin page '{slug}' not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"slug": slug},
        )


class AccessDeniedError(CMSAdminError):
    """Raised when the current user lacks the capability an admin page requires"""

    def __init__(self, slug: str, required_capability: str):
        super().__init__(
            message="You do not have sufficient permissions to access this page",
            status_code=status.HTTP_403_FORBIDDEN,
            details={"slug": slug, "required_capability": required_capability},
        )
