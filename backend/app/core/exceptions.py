"""Custom exception classes for the query safety service."""


class QuerySafetyException(Exception):
    """Base exception for all service-specific errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(QuerySafetyException):
    """Raised when input is malformed (bad date, unknown enum value, bad page)."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            details=f"Invalid value for '{field}'" if field else "The request input is invalid"
        )
        self.field = field


class InvalidRangeError(ValidationError):
    """Raised when a time range starts after it ends."""

    def __init__(self, start: object, end: object):
        super().__init__(message=f"Invalid range: {start} is after {end}", field="date_range")
        self.details = "The start of the range must not be after its end"
        self.start = start
        self.end = end


class NotFoundError(QuerySafetyException):
    """Raised when an entity does not exist or is not owned by the caller."""


class QueryNotFoundError(NotFoundError):
    """Raised when a query record is not found for the requesting owner."""

    def __init__(self, query_id: str):
        super().__init__(
            message=f"Query not found: {query_id}",
            details="The requested query does not exist"
        )
        self.query_id = query_id


class ReportNotFoundError(NotFoundError):
    """Raised when a report is not found for the requesting owner."""

    def __init__(self, report_id: str):
        super().__init__(
            message=f"Report not found: {report_id}",
            details="The requested report does not exist"
        )
        self.report_id = report_id


class NotReadyError(QuerySafetyException):
    """Raised when an entity is requested before it reached a usable state."""


class ReportNotReadyError(NotReadyError):
    """Raised when downloading a report that has not completed."""

    def __init__(self, report_id: str, status: str):
        super().__init__(
            message=f"Report {report_id} is not ready for download",
            details=f"Report status is '{status}'"
        )
        self.report_id = report_id
        self.status = status


class AggregationError(QuerySafetyException):
    """Raised when aggregating query records fails."""

    def __init__(self, operation: str, original_error: Exception | None = None):
        message = f"Aggregation error during {operation}"
        if original_error:
            message += f": {str(original_error)}"
        super().__init__(
            message=message,
            details="The aggregation could not be completed"
        )
        self.operation = operation
        self.original_error = original_error


class AggregationLimitError(AggregationError):
    """Raised when a report would aggregate more records than allowed."""

    def __init__(self, record_count: int, limit: int):
        super().__init__(operation="record fetch")
        self.message = f"Report range contains {record_count} records, limit is {limit}"
        self.args = (self.message,)
        self.record_count = record_count
        self.limit = limit


class AnalyzerError(QuerySafetyException):
    """Raised when the safety analyzer fails to score a query."""

    def __init__(self, original_error: Exception | None = None):
        message = "Safety analyzer error"
        if original_error:
            message += f": {str(original_error)}"
        super().__init__(
            message=message,
            details="The safety analysis service is temporarily unavailable"
        )
        self.original_error = original_error
