"""Symbol record dataclasses built up while parsing a declaration line."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SymbolKind(str, Enum):
    """Declaration category of a parsed line."""
    CLASS = "class"
    FUNCTION = "function"
    VARIABLE = "variable"


@dataclass
class Parameter:
    """A function parameter."""
    name: str = ""                  # Parameter name, e.g. "$bar" or "bar"
    value: str = ""                 # Default value text, empty if none
    type: Optional[str] = None      # Declared type, if the source has one


@dataclass
class ReturnInfo:
    """Whether a symbol returns something, and what type it is."""
    present: bool = False
    type: Optional[str] = None      # Return type, or the declared type of a variable


@dataclass
class Symbols:
    """Normalized result of parsing one declaration line."""
    name: str = ""
    kind: Optional[SymbolKind] = None
    parameters: list[Parameter] = field(default_factory=list)
    returns: ReturnInfo = field(default_factory=ReturnInfo)

    def declare(self, kind: SymbolKind) -> bool:
        """Set the kind once; later calls are ignored.

        Returns True if this call set the kind.
        """
        if self.kind is not None:
            return False
        self.kind = kind
        self.returns.present = kind is not SymbolKind.VARIABLE
        return True

    def set_name(self, name: str) -> bool:
        """Set the name once; later calls and empty names are ignored."""
        if self.name or not name:
            return False
        self.name = name
        return True

    def add_parameter(self, name: str = "", type: Optional[str] = None) -> Parameter:
        param = Parameter(name=name, type=type)
        self.parameters.append(param)
        return param

    @property
    def last_parameter(self) -> Optional[Parameter]:
        return self.parameters[-1] if self.parameters else None

    def append_return_type(self, suffix: str):
        """Append to the captured return type (e.g. an array suffix)."""
        self.returns.type = (self.returns.type or "") + suffix

