from __future__ import annotations

MAX_FILE_SIZE_MB = 5

EMPTY_INPUT_MESSAGE = "Please paste your resume text first."
INSUFFICIENT_PDF_TEXT_MESSAGE = (
    "We could not extract enough text from this PDF. It might be empty, password-protected, "
    "or a scanned image. Please try an image upload or copy-pasting text."
)
PDF_PARSE_FAILED_MESSAGE = (
    "Failed to parse the PDF file. It might be encrypted or corrupted. "
    "Please try an image upload or copy-pasting text."
)


class ResumeReviewError(RuntimeError):
    """Base for every failure that ends a pipeline run with a user-facing message."""

    status_code = 500

    def __init__(self, message: str, *, code: str = "error"):
        super().__init__(message)
        self.code = code


class InputValidationError(ResumeReviewError):
    status_code = 400


class FileTooLarge(InputValidationError):
    status_code = 413

    def __init__(self, size_mb: float):
        super().__init__(
            f"File is too large ({size_mb:.1f}MB). Maximum allowed size is {MAX_FILE_SIZE_MB}MB.",
            code="file_too_large",
        )
        self.size_mb = size_mb


class UnsupportedType(InputValidationError):
    status_code = 415

    def __init__(self, extension: str):
        super().__init__(
            f"Unsupported file type: {extension}. "
            "Please upload a PDF, Image (JPG, PNG, WebP), or Text file.",
            code="unsupported_type",
        )
        self.extension = extension


class EmptyInput(InputValidationError):
    def __init__(self, message: str = EMPTY_INPUT_MESSAGE):
        super().__init__(message, code="empty_input")


class InsufficientContent(InputValidationError):
    def __init__(self, message: str = INSUFFICIENT_PDF_TEXT_MESSAGE):
        super().__init__(message, code="insufficient_content")


class ExtractionError(ResumeReviewError):
    status_code = 422

    def __init__(self, message: str = PDF_PARSE_FAILED_MESSAGE, *, code: str = "extraction_failed"):
        super().__init__(message, code=code)


class AnalysisError(ResumeReviewError):
    status_code = 502

    def __init__(self, message: str, *, code: str = "llm_exception"):
        super().__init__(message, code=code)


class MalformedResponse(AnalysisError):
    def __init__(self, message: str):
        super().__init__(message, code="malformed_response")


class AnalysisTimeout(AnalysisError):
    status_code = 504

    def __init__(self, timeout_s: float):
        super().__init__(f"Analysis did not complete within {timeout_s:g}s.", code="timeout")
        self.timeout_s = timeout_s


class HistoryWriteError(ResumeReviewError):
    status_code = 500

    def __init__(self):
        super().__init__(
            "The analysis finished but could not be saved to history. Please try again.",
            code="history_write_failed",
        )


class AnalysisInProgress(ResumeReviewError):
    status_code = 409

    def __init__(self):
        super().__init__(
            "An analysis is already running. Please wait for it to finish.",
            code="analysis_in_progress",
        )
