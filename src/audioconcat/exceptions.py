"""
Custom exception hierarchy for audioconcat.

Every failure the pipeline can hit is represented by a subclass of
AudioConcatError so callers can tell failure kinds apart without parsing
message text.
"""


class AudioConcatError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, message, error_code=None, suggestion=None):
        self.error_code = error_code
        self.suggestion = suggestion
        super().__init__(message)

    def get_user_message(self):
        """Get a user-friendly error message with suggestions."""
        message = str(self)
        if self.suggestion:
            message += f"\n\nSuggestion: {self.suggestion}"
        if self.error_code:
            message += f"\nError Code: {self.error_code}"
        return message


class ConfigurationError(AudioConcatError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message, config_key=None, config_value=None):
        self.config_key = config_key
        self.config_value = config_value

        full_message = f"Configuration error: {message}"
        if config_key:
            full_message += f" (key: {config_key})"
        if config_value is not None:
            full_message += f" (value: {config_value})"

        suggestion = "Run with -help to see the accepted options"
        super().__init__(full_message, error_code="CFG001", suggestion=suggestion)


class DependencyError(AudioConcatError):
    """Raised when the external media tool is not found or not working."""

    def __init__(self, dependency_name, message=None):
        self.dependency_name = dependency_name

        if not message:
            message = f"Required dependency '{dependency_name}' is not available"

        suggestion = "Install FFmpeg from https://ffmpeg.org/ and ensure it's in your system PATH"
        super().__init__(message, error_code="DEP001", suggestion=suggestion)


class ValidationError(AudioConcatError):
    """Raised when an input file fails validation."""

    validation_type = "input"

    def __init__(self, message, path=None):
        self.path = path

        full_message = f"Input validation failed: {message}"
        if path is not None:
            full_message += f" (path: {path})"

        super().__init__(full_message, error_code="VAL001", suggestion=self._get_suggestion())

    def _get_suggestion(self):
        return "Please check the input and try again"


class InputNotFoundError(ValidationError):
    """The input path does not exist."""

    validation_type = "not_found"

    def _get_suggestion(self):
        return "Ensure the path exists and is spelled correctly"


class InputNotReadableError(ValidationError):
    """The input path exists but cannot be opened or inspected."""

    validation_type = "not_readable"

    def _get_suggestion(self):
        return "Check file permissions and ensure the file is not in use by another application"


class NotRegularFileError(ValidationError):
    """The input path is a directory or a special file."""

    validation_type = "not_regular_file"

    def _get_suggestion(self):
        return "Pass audio files, not directories or device files"


class ResourceError(AudioConcatError):
    """Raised when a temporary resource cannot be created."""

    def __init__(self, message, resource_type):
        self.resource_type = resource_type

        full_message = f"Resource error ({resource_type}): {message}"
        suggestion = "Check free disk space and permissions of the temporary directory"
        super().__init__(full_message, error_code="RES001", suggestion=suggestion)


class ManifestError(AudioConcatError):
    """Raised when the concatenation manifest cannot be written or read."""

    def __init__(self, message, manifest_path=None):
        self.manifest_path = manifest_path

        full_message = f"Concatenation manifest error: {message}"
        if manifest_path:
            full_message += f" (file: {manifest_path})"

        suggestion = "Check free disk space and permissions of the temporary directory"
        super().__init__(full_message, error_code="MAN001", suggestion=suggestion)


class ExternalToolError(AudioConcatError):
    """Raised when the external tool cannot be started or exits with an error."""

    def __init__(self, message, command=None, returncode=None, output=None, operation=None):
        self.command = list(command) if command else []
        self.returncode = returncode
        self.output = output or ""
        self.operation = operation

        full_message = message
        if operation:
            full_message = f"{operation} failed: {message}"
        if returncode is not None:
            full_message += f" (exit status {returncode})"
        if self.output:
            full_message += f"\n{self.output}"

        suggestion = "Check if the input file is corrupted or run with -verbose to see the FFmpeg output"
        super().__init__(full_message, error_code="EXT001", suggestion=suggestion)
