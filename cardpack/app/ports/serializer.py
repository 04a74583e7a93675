"""Structured-text codec port."""

from typing import Any, Protocol


class SerializerPort(Protocol):
    """Port interface for parsing and emitting card documents."""

    def parse(self, text: str) -> Any:
        """Parse a document.

        Raises:
            InvalidFormatError: If ``text`` is not well-formed.
        """
        ...

    def stringify(self, value: Any) -> str:
        ...
