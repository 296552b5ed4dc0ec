class AnalysisError(ValueError):
    """Base for request problems the caller can fix; message is safe to return."""


class InvalidAnalysisType(AnalysisError):
    def __init__(self, analysis_type: str | None = None):
        super().__init__("Invalid analysis type")
        self.analysis_type = analysis_type


class MissingFieldError(AnalysisError):
    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}")
        self.field = field


class UnknownModelError(AnalysisError):
    def __init__(self, model: str):
        super().__init__(f"Unknown model: {model}")
        self.model = model


class TextTooLongError(AnalysisError):
    def __init__(self, length: int, limit: int):
        super().__init__(f"Text exceeds {limit} characters")
        self.length = length
        self.limit = limit


class BatchTooLargeError(AnalysisError):
    def __init__(self, count: int, limit: int):
        super().__init__(f"Batch exceeds {limit} documents")
        self.count = count
        self.limit = limit
