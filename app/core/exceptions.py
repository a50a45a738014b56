from typing import Optional, Any

class SmsProxyError(Exception):
    """
    Base exception for the SMS proxy.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ValidationError(SmsProxyError):
    """
    Raised when a request is missing fields, exceeds a limit or has no valid recipients.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)

class TransportError(SmsProxyError):
    """
    Raised when the outbound call to the gateway fails before a usable reply is received.
    """
    def __init__(self, message: str = "Gateway request failed", details: Optional[Any] = None):
        super().__init__(message, code="TRANSPORT_ERROR", status_code=500, details=details)

class ConfigurationError(SmsProxyError):
    """
    Raised when the gateway cannot be called because credentials are missing.
    """
    def __init__(self, message: str = "Gateway is not configured", details: Optional[Any] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", status_code=500, details=details)
