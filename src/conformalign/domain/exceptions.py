"""Errors raised by correspondence search and superposition."""


class AlignmentError(Exception):
    """Base class for alignment failures."""


class NoCorrespondenceFound(AlignmentError):
    """Raised when neither the caller nor the oracle supplies a correspondence."""


class DimensionMismatch(AlignmentError, ValueError):
    """Raised when point, weight or correspondence lengths disagree."""


class InvalidConformationId(AlignmentError, KeyError):
    """Raised when a conformation id is not present in a structure."""

    def __init__(self, conf_id):
        super().__init__(conf_id)
        self.conf_id = conf_id

    def __str__(self) -> str:
        return f"No conformation with id {self.conf_id!r}"
