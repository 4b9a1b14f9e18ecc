"""Exceptions raised by the memo file layer."""


class FmemoError(Exception):
    """Base exception for fmemo operations."""


class MemoFileError(FmemoError):
    """A memo file or directory could not be served.

    ``kind`` is one of the ``KIND_*`` categories so callers can report
    the failure without parsing the message.
    """

    KIND_NOT_FOUND = "not_found"
    KIND_INVALID_EXTENSION = "invalid_extension"
    KIND_NOT_A_DIRECTORY = "not_a_directory"
    KIND_OUTSIDE_ROOT = "outside_root"
    KIND_SENSITIVE = "sensitive"
    KIND_UNREADABLE = "unreadable"

    def __init__(self, kind: str, message: str, path: str = ""):
        super().__init__(message)
        self.kind = kind
        self.path = path

    def to_dict(self) -> dict:
        result = {"error": str(self), "kind": self.kind}
        if self.path:
            result["path"] = self.path
        return result
