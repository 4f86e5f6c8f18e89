"""Error taxonomy shared by the services and the HTTP layer.

Every error carries the HTTP status it maps to and a stable ``code`` so
clients can tell e.g. a duplicate name apart from other store failures
without parsing the message.
"""


class ScenarioHubError(Exception):
    status_code = 500
    code = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(ScenarioHubError):
    status_code = 401
    code = "unauthenticated"


class IncorrectPassword(ScenarioHubError):
    status_code = 401
    code = "incorrect_password"


class UnknownUser(ScenarioHubError):
    status_code = 400
    code = "unknown_user"


class UserExists(ScenarioHubError):
    status_code = 400
    code = "user_exists"


class InvalidForm(ScenarioHubError):
    status_code = 400
    code = "invalid_form"


class MissingFile(ScenarioHubError):
    status_code = 400
    code = "missing_file"

    def __init__(self, filename: str):
        super().__init__(f"Missing {filename}")
        self.filename = filename


class UploadTooLarge(ScenarioHubError):
    status_code = 413
    code = "upload_too_large"


class InvalidMetadata(ScenarioHubError):
    status_code = 400
    code = "invalid_metadata"


class MetadataMismatch(ScenarioHubError):
    status_code = 400
    code = "metadata_mismatch"


class InvalidFormTime(MetadataMismatch):
    code = "invalid_time"


class DuplicateName(ScenarioHubError):
    status_code = 409
    code = "duplicate_name"


class PersistenceError(ScenarioHubError):
    code = "persistence_error"


class FileWriteError(ScenarioHubError):
    code = "file_write_error"
