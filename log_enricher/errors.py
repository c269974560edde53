"""Log Enricher - Errors that abort a run"""


class LogEnricherError(Exception):
    """Base class for failures reported to the caller"""


class InputEmptyError(LogEnricherError):
    def __init__(self):
        super().__init__("The uploaded file is empty.")


class UnknownLogTypeError(LogEnricherError):
    def __init__(self, first_line: str):
        self.first_line = first_line
        super().__init__("Could not determine log type (expected SSH or HTTP).")


class PipelineError(LogEnricherError):
    """Unexpected failure while reading, parsing or formatting"""

    def __init__(self, message: str):
        super().__init__(f"An error occurred during processing: {message}")


class ConfigError(LogEnricherError):
    """Invalid environment setting"""

    def __init__(self, name: str, value: str, problem: str):
        self.name = name
        super().__init__(f"Invalid {name}={value!r}: {problem}")
