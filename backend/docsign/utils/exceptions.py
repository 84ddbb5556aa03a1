class DocSignError(Exception):
    """Base exception for DocSign API errors"""
    def __init__(self, code: str, message: str, status_code: int = 400, field: str = None, details: dict = None):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.field = field
        self.details = details or {}
        super().__init__(self.message)


class MissingInputError(DocSignError):
    def __init__(self, field: str, message: str = None):
        super().__init__("MISSING_INPUT", message or f"Missing required input: {field}", 400, field)


class ValidationError(DocSignError):
    def __init__(self, message: str, field: str = None, details: dict = None):
        super().__init__("VALIDATION_ERROR", message, 400, field, details)


class ParseError(DocSignError):
    def __init__(self, reason: str = None):
        message = "Could not read PDF document"
        if reason:
            message += f": {reason}"
        super().__init__("PDF_PARSE_ERROR", message, 422, "pdfData")


class PageRangeError(DocSignError):
    def __init__(self, page: int, page_count: int, field_id: str = None):
        message = f"Page {page} does not exist (document has {page_count} page{'s' if page_count != 1 else ''})"
        super().__init__(
            "PAGE_OUT_OF_RANGE",
            message,
            422,
            "page",
            details={"page": page, "page_count": page_count, "field_id": field_id}
        )


class AssetDecodeError(DocSignError):
    def __init__(self, reason: str = None, field_id: str = None):
        message = "Could not decode embedded image"
        if reason:
            message += f": {reason}"
        super().__init__("ASSET_DECODE_ERROR", message, 422, "value", details={"field_id": field_id})


class PayloadTooLargeError(DocSignError):
    def __init__(self, size: int, limit: int):
        super().__init__(
            "PAYLOAD_TOO_LARGE",
            f"Payload of {size} bytes exceeds the {limit} byte limit",
            413,
            details={"size": size, "limit": limit}
        )


class TransformTimeoutError(DocSignError):
    def __init__(self, operation: str, timeout: float):
        super().__init__(
            "TRANSFORM_TIMEOUT",
            f"{operation} did not finish within {timeout:g} seconds",
            504,
            details={"operation": operation, "timeout_seconds": timeout}
        )


class StorageError(DocSignError):
    def __init__(self, operation: str, file_path: str, reason: str = None):
        message = f"File {operation} failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__("STORAGE_ERROR", message, 500, details={"operation": operation, "file_path": file_path})
