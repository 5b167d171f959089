"""Exceptions raised while building, decoding, or mutating nodes."""
from __future__ import annotations


class NodeError(Exception):
    """Base class for all node errors."""


class InvalidNodeArgumentError(NodeError, ValueError):
    """Raised when a node or builder receives an invalid argument.

    Examples are an empty permission or a server name containing a
    reserved delimiter.
    """


class NodeStateError(NodeError, RuntimeError):
    """Raised when an operation is not valid for the node's current state."""


class NodeParseError(NodeError, ValueError):
    """Raised when a serialized node cannot be decoded.

    Attributes
    ----------
    text:
        The serialized text (or fragment) that failed to parse.
    """

    def __init__(self, message: str, text: str | None = None) -> None:
        self.text = text
        suffix = f": {text!r}" if text is not None else ""
        super().__init__(f"{message}{suffix}")
