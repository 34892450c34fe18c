"""
Table Service Errors

Error taxonomy shared by the table client and everything built on it.
"""


class TableServiceError(Exception):
    """Base error for table service failures"""

    pass


class TableNotFoundError(TableServiceError):
    """Statement targets a table that does not exist (or is not provisioned yet)"""

    pass


class StatementError(TableServiceError):
    """Statement rejected by the table service"""

    pass


class ConfirmationTimeoutError(TableServiceError):
    """Write transaction was not confirmed within the allowed time"""

    pass


class GatewayError(TableServiceError):
    """Transport failure or unexpected response from the gateway"""

    pass
