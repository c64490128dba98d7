"""Core exceptions for the Scriptorium application."""


class ScriptoriumError(Exception):
    """Base exception for all Scriptorium errors."""


class PostNotFoundError(ScriptoriumError, FileNotFoundError):
    """Raised when a markdown source file does not exist."""

    def __init__(self, path: object) -> None:
        self.path = path
        super().__init__(f"Markdown source not found: {path}")


class UnknownAuthorError(ScriptoriumError, KeyError):
    """Raised when an author key is missing from the author table."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Unknown author: {self.key!r}"


class AuthorConfigError(ScriptoriumError, ValueError):
    """Raised when the authors file cannot be turned into an author table."""


class PostMetadataError(ScriptoriumError, ValueError):
    """Raised when a post's front matter is malformed."""


class PostEncodingError(ScriptoriumError, UnicodeError):
    """Raised when a markdown source is not valid UTF-8."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        super().__init__(f"Markdown source {path} is not valid UTF-8: {reason}")
