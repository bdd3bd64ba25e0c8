"""Attribute definitions and the attribute set editor.

An attribute is a named product dimension (Size, Color) with an ordered
list of allowed values. Attribute sets are immutable snapshots: every
operator returns a new ``AttributeSet`` and never touches the one it
was given. Operators are total, so an unknown attribute id or an
out-of-range value index returns an equal snapshot instead of raising.

Editing never regenerates variants. Callers run the combination
generator and the reconciler after the edit (``VariantMatrix`` does
this for them).

Example usage:
    attributes = AttributeSet()
    attributes = add_attribute(attributes, name="Size")
    size_id = attributes[0].id
    attributes = set_value(attributes, size_id, 0, "S")
    attributes = add_value(attributes, size_id, "M")
"""

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Self

from variantmatrix.domain.base import ValueObject
from variantmatrix.domain.exceptions import UnknownCommandError
from variantmatrix.domain.value_objects import AttributeId


# ============================================================================
# Snapshots
# ============================================================================


@dataclass(frozen=True)
class AttributeDefinition(ValueObject):
    """A single configurable product dimension.

    Attributes:
        id: Stable identifier, never changes for the definition's lifetime.
        name: Free-text label, not required to be unique.
        values: Allowed values in insertion order; duplicates are kept.
    """

    id: AttributeId
    name: str = ""
    values: tuple[str, ...] = ()

    @classmethod
    def create(cls, name: str = "", values: Iterable[str] = ("",)) -> Self:
        """Create a definition with a fresh id.

        Args:
            name: Attribute label.
            values: Initial values, defaults to one empty slot.

        Returns:
            New AttributeDefinition.
        """
        return cls(id=AttributeId.generate(), name=name, values=tuple(values))


@dataclass(frozen=True)
class AttributeSet(ValueObject):
    """Ordered, immutable collection of attribute definitions.

    Definition order is significant: it drives combination order and,
    under positional matching, variant identity.
    """

    attributes: tuple[AttributeDefinition, ...] = field(default_factory=tuple)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[str]]) -> Self:
        """Build a set from ``{name: values}`` in mapping order.

        Args:
            mapping: Attribute names to their allowed values.

        Returns:
            AttributeSet with a fresh id per attribute.
        """
        return cls(
            attributes=tuple(
                AttributeDefinition.create(name=name, values=values)
                for name, values in mapping.items()
            )
        )

    def __iter__(self) -> Iterator[AttributeDefinition]:
        return iter(self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)

    def __getitem__(self, index: int) -> AttributeDefinition:
        return self.attributes[index]

    def get(self, attribute_id: AttributeId) -> AttributeDefinition | None:
        """Look up a definition by id.

        Args:
            attribute_id: Attribute to find.

        Returns:
            The definition, or None if the id is unknown.
        """
        return next((a for a in self.attributes if a.id == attribute_id), None)

    @property
    def ids(self) -> tuple[AttributeId, ...]:
        """Attribute ids in definition order."""
        return tuple(a.id for a in self.attributes)

    @property
    def names(self) -> tuple[str, ...]:
        """Attribute names in definition order."""
        return tuple(a.name for a in self.attributes)


# ============================================================================
# Operators
# ============================================================================


def _update(
    attributes: AttributeSet,
    attribute_id: AttributeId,
    change: Callable[[AttributeDefinition], AttributeDefinition],
) -> AttributeSet:
    """Apply ``change`` to the definition with ``attribute_id``."""
    if attributes.get(attribute_id) is None:
        return attributes
    return AttributeSet(
        attributes=tuple(
            change(a) if a.id == attribute_id else a for a in attributes.attributes
        )
    )


def add_attribute(
    attributes: AttributeSet,
    name: str = "",
    attribute_id: AttributeId | None = None,
) -> AttributeSet:
    """Append a new attribute with a single empty value slot.

    Args:
        attributes: Current snapshot.
        name: Label for the new attribute (empty by default).
        attribute_id: Id to assign; a fresh one is generated when omitted.

    Returns:
        New snapshot with the attribute appended.
    """
    definition = AttributeDefinition(
        id=attribute_id or AttributeId.generate(),
        name=name,
        values=("",),
    )
    return AttributeSet(attributes=attributes.attributes + (definition,))


def remove_attribute(attributes: AttributeSet, attribute_id: AttributeId) -> AttributeSet:
    """Remove the attribute with ``attribute_id``."""
    if attributes.get(attribute_id) is None:
        return attributes
    return AttributeSet(
        attributes=tuple(a for a in attributes.attributes if a.id != attribute_id)
    )


def rename_attribute(
    attributes: AttributeSet, attribute_id: AttributeId, name: str
) -> AttributeSet:
    """Replace the name of an attribute, leaving its values untouched."""
    return _update(attributes, attribute_id, lambda a: replace(a, name=name))


def add_value(
    attributes: AttributeSet, attribute_id: AttributeId, value: str = ""
) -> AttributeSet:
    """Append a value (an empty slot by default) to an attribute."""
    return _update(attributes, attribute_id, lambda a: replace(a, values=a.values + (value,)))


def set_value(
    attributes: AttributeSet, attribute_id: AttributeId, index: int, value: str
) -> AttributeSet:
    """Replace ``values[index]`` of an attribute.

    Indices outside ``0 <= index < len(values)`` are ignored.
    """

    def change(a: AttributeDefinition) -> AttributeDefinition:
        if not 0 <= index < len(a.values):
            return a
        return replace(a, values=a.values[:index] + (value,) + a.values[index + 1 :])

    return _update(attributes, attribute_id, change)


def remove_value(
    attributes: AttributeSet, attribute_id: AttributeId, index: int
) -> AttributeSet:
    """Remove ``values[index]`` of an attribute, shifting later values down.

    Indices outside ``0 <= index < len(values)`` are ignored.
    """

    def change(a: AttributeDefinition) -> AttributeDefinition:
        if not 0 <= index < len(a.values):
            return a
        return replace(a, values=a.values[:index] + a.values[index + 1 :])

    return _update(attributes, attribute_id, change)


# ============================================================================
# Commands
# ============================================================================


@dataclass(frozen=True)
class AddAttribute:
    """Append a new attribute."""

    name: str = ""
    attribute_id: AttributeId | None = None


@dataclass(frozen=True)
class RemoveAttribute:
    """Remove an attribute."""

    attribute_id: AttributeId


@dataclass(frozen=True)
class RenameAttribute:
    """Rename an attribute."""

    attribute_id: AttributeId
    name: str


@dataclass(frozen=True)
class AddValue:
    """Append a value slot to an attribute."""

    attribute_id: AttributeId
    value: str = ""


@dataclass(frozen=True)
class SetValue:
    """Replace one value of an attribute."""

    attribute_id: AttributeId
    index: int
    value: str


@dataclass(frozen=True)
class RemoveValue:
    """Remove one value of an attribute."""

    attribute_id: AttributeId
    index: int


AttributeCommand = AddAttribute | RemoveAttribute | RenameAttribute | AddValue | SetValue | RemoveValue


def apply_command(attributes: AttributeSet, command: AttributeCommand) -> AttributeSet:
    """Apply a single editor command and return the next snapshot.

    Args:
        attributes: Current snapshot.
        command: Editor command.

    Returns:
        Next snapshot.

    Raises:
        UnknownCommandError: If ``command`` is not an attribute command.
    """
    if isinstance(command, AddAttribute):
        return add_attribute(attributes, name=command.name, attribute_id=command.attribute_id)
    if isinstance(command, RemoveAttribute):
        return remove_attribute(attributes, command.attribute_id)
    if isinstance(command, RenameAttribute):
        return rename_attribute(attributes, command.attribute_id, command.name)
    if isinstance(command, AddValue):
        return add_value(attributes, command.attribute_id, command.value)
    if isinstance(command, SetValue):
        return set_value(attributes, command.attribute_id, command.index, command.value)
    if isinstance(command, RemoveValue):
        return remove_value(attributes, command.attribute_id, command.index)
    raise UnknownCommandError(command)


def apply_commands(
    attributes: AttributeSet, commands: Iterable[AttributeCommand]
) -> AttributeSet:
    """Fold a sequence of commands over a snapshot, in order."""
    for command in commands:
        attributes = apply_command(attributes, command)
    return attributes
