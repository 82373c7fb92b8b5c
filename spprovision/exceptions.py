class ProvisioningError(Exception):
    """Base class for errors raised while provisioning SharePoint objects."""

    def __init__(self, message: str = None, *, cause: Exception = None):
        if message is None:
            message = "Error when provisioning SharePoint objects"
        super().__init__(message)
        # Optional chaining for debugging
        self.__cause__ = cause


class ConfigurationError(ProvisioningError):
    """Raised when required connection settings are missing."""

    def __init__(self, key: str, message: str = None, *, cause: Exception = None):
        self.key = key
        if message is None:
            message = f"Missing required environment variable: {key}"
        super().__init__(message, cause=cause)


class ListConfigurationError(ProvisioningError):
    """Raised when a list definition cannot be parsed."""

    def __init__(self, message: str = None, *, cause: Exception = None):
        if message is None:
            message = "Invalid list definition"
        super().__init__(message, cause=cause)


class FieldXmlError(ProvisioningError):
    """Raised when a field schema XML is malformed."""

    def __init__(self, field_xml: str, message: str = None, *, cause: Exception = None):
        self.field_xml = field_xml
        if message is None:
            message = f"Invalid field schema XML: {field_xml}"
        super().__init__(message, cause=cause)
