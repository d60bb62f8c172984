"""
Custom exceptions for the project crawler.
"""

from typing import Optional, Dict, Any, Sequence


class CrawlerError(Exception):
    """
    Base exception for all project crawler errors.
    
    Every error raised by the crawler carries an optional error code,
    a context dictionary and the original cause so that callers can log
    or serialize it uniformly.
    """
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """
        Initialize crawler error.
        
        Args:
            message: Error message
            error_code: Optional error code for categorization
            context: Additional context information
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None
        }
    
    def __str__(self) -> str:
        """String representation of the error."""
        parts = [self.message]
        
        if self.error_code:
            parts.append(f"Code: {self.error_code}")
        
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"Context: {context_str}")
        
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        
        return " | ".join(parts)


class TransportError(CrawlerError):
    """
    Raised when the remote API cannot be reached.
    
    Wraps connection failures, timeouts and other ``requests`` exceptions
    raised before a response was received.
    """
    
    def __init__(self, message: str, url: Optional[str] = None, **kwargs):
        context = kwargs.pop('context', {})
        if url:
            context['url'] = url
        kwargs.setdefault('error_code', "TRANSPORT")
        super().__init__(message, context=context, **kwargs)
        self.url = url


class UnexpectedStatusError(CrawlerError):
    """
    Raised when the remote API answers with a status the crawler cannot use.
    """
    
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        org: Optional[str] = None,
        page: Optional[int] = None,
        url: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize unexpected status error.
        
        Args:
            message: Error message
            status_code: HTTP status returned by the last request
            org: Organization or user being listed
            page: Page number being fetched
            url: Requested URL
            **kwargs: Additional arguments for base class
        """
        context = kwargs.pop('context', {})
        if status_code is not None:
            context['status_code'] = status_code
        if org:
            context['org'] = org
        if page is not None:
            context['page'] = page
        if url:
            context['url'] = url
        kwargs.setdefault('error_code', "UNEXPECTED_STATUS")
        super().__init__(message, context=context, **kwargs)
        
        self.status_code = status_code
        self.org = org
        self.page = page
        self.url = url


class MalformedRecordError(CrawlerError):
    """
    Raised when a repository listing page cannot be turned into records.
    """
    
    def __init__(
        self,
        message: str,
        missing_keys: Optional[Sequence[str]] = None,
        page_index: Optional[int] = None,
        **kwargs
    ):
        context = kwargs.pop('context', {})
        if missing_keys:
            context['missing_keys'] = list(missing_keys)
        if page_index is not None:
            context['page_index'] = page_index
        kwargs.setdefault('error_code', "MALFORMED_RECORD")
        super().__init__(message, context=context, **kwargs)
        
        self.missing_keys = list(missing_keys or [])
        self.page_index = page_index


class ConfigurationError(CrawlerError):
    """
    Exception for configuration-related errors.
    """
    
    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs
    ):
        """
        Initialize configuration error.
        
        Args:
            message: Error message
            config_key: Configuration key that caused the error
            config_value: Invalid configuration value
            **kwargs: Additional arguments for base class
        """
        context = kwargs.pop('context', {})
        if config_key:
            context['config_key'] = config_key
        if config_value is not None:
            context['config_value'] = str(config_value)
        kwargs.setdefault('error_code', "CONFIGURATION")
        super().__init__(message, context=context, **kwargs)
        
        self.config_key = config_key
        self.config_value = config_value
