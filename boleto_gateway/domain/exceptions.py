"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ERPAPIError(DomainException):
    """SGA (ERP) API returned an error or is unavailable"""

    pass


class InvalidRecordDataError(ERPAPIError):
    """Boleto or vehicle data from the ERP is malformed"""

    pass


class MessagingAPIError(DomainException):
    """Messaging provider rejected or failed to deliver a message"""

    pass


class TenantStoreError(DomainException):
    """Tenant configuration could not be loaded"""

    pass
