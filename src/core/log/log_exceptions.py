class LogError(Exception):
    pass


class InvalidLevelError(LogError, ValueError):
    def __init__(self, level):
        self.level = level
        super().__init__(f"unknown log level {level!r}")


class FileOpenError(LogError):
    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to open log {path}: {cause}")
