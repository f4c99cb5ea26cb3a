"""Custom exceptions for the LeadHub application."""


class LeadHubException(Exception):
    """Base exception for LeadHub application."""
    
    pass


class ValidationError(LeadHubException):
    """Raised when validation fails."""
    
    pass


class NotFoundError(LeadHubException):
    """Raised when a resource is not found."""
    
    pass


class DatabaseError(LeadHubException):
    """Raised when a database operation fails."""
    
    pass


class ConfigurationError(LeadHubException):
    """Raised when configuration is invalid."""
    
    pass


class AuthenticationError(LeadHubException):
    """Raised when authentication fails."""
    
    pass


class AuthorizationError(LeadHubException):
    """Raised when an authenticated caller lacks permission."""

    pass
