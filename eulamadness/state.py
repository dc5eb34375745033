"""Named game variables shared across entities."""

from __future__ import annotations

from .variable import Value, Variable


class State:
    """A registry of named variables."""

    def __init__(self) -> None:
        self._variables: dict[str, Variable] = {}

    def variable(self, name: str) -> Variable:
        """Return the variable ``name``, creating it as integer zero if new."""
        existing = self._variables.get(name)
        if existing is not None:
            return existing
        return self.set_variable(name, 0)

    def set_variable(self, name: str, value: Value | Variable) -> Variable:
        """Create a new variable; raise ``ValueError`` if it already exists."""
        if name in self._variables:
            raise ValueError(f"variable {name!r} already exists")
        variable = value if isinstance(value, Variable) else Variable(value)
        self._variables[name] = variable
        return variable

    def __contains__(self, name: object) -> bool:
        return name in self._variables