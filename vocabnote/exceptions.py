"""Exception hierarchy for vocabnote.

Every error carries the operation and the target it failed on so callers can
log it meaningfully. A word without definitions is not an error: providers
return an empty ``WordItem`` for it.
"""


class VocabNoteError(Exception):
    """Base exception for all vocabnote errors."""

    pass


class InvalidEndpointError(VocabNoteError):
    """Raised when no dictionary provider is registered for an endpoint."""

    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint
        super().__init__(f"invalid dictionary endpoint: {endpoint!r}")


class InvalidActionError(VocabNoteError):
    """Raised when a notebook mark action is not recognized."""

    def __init__(self, action: object) -> None:
        self.action = action
        super().__init__(f"invalid notebook action: {action!r}")


class InvalidWordError(VocabNoteError):
    """Raised when a notebook word is empty or blank."""

    def __init__(self, word: str) -> None:
        self.word = word
        super().__init__(f"invalid word: {word!r}")


class InvalidChapterError(VocabNoteError):
    """Raised when a chapter name cannot be used as a partition name."""

    def __init__(self, chapter: str) -> None:
        self.chapter = chapter
        super().__init__(f"invalid chapter name: {chapter!r}")


class TransportError(VocabNoteError):
    """Raised when a dictionary provider cannot fetch or parse a response."""

    def __init__(self, endpoint: str, word: str, reason: str) -> None:
        self.endpoint = endpoint
        self.word = word
        self.reason = reason
        super().__init__(f"{endpoint} lookup of {word!r} failed: {reason}")


class StorageError(VocabNoteError):
    """Base class for notebook storage failures."""

    operation = "access"

    def __init__(self, target: str, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"{self.operation} {target} failed: {reason}")


class StorageReadError(StorageError):
    """Raised when a chapter file or table cannot be read."""

    operation = "read"


class StorageWriteError(StorageError):
    """Raised when a chapter file or table cannot be written."""

    operation = "write"


class StorageMarshalError(StorageError):
    """Raised when notes cannot be serialized or deserialized."""

    operation = "marshal"
