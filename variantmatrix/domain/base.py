"""Base classes for domain layer.

Provides foundational abstractions for value objects and domain events
shared by the attribute editor, the combination generator and the
variant reconciler.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar
from uuid import uuid4


# ============================================================================
# Value Object Base
# ============================================================================


@dataclass(frozen=True)
class ValueObject(ABC):
    """Base class for value objects.

    Value objects are immutable and compared by their attributes,
    not by identity. Attribute definitions, combinations and variant
    records are all value objects: every edit produces a new instance.

    Example:
        @dataclass(frozen=True)
        class Selection(ValueObject):
            name: str
            value: str
    """

    pass


# ============================================================================
# Domain Event Base
# ============================================================================


@dataclass(frozen=True)
class DomainEvent(ABC):
    """Something that happened to one variant matrix.

    Subclasses set ``event_type`` and add their own fields, which
    ``_payload`` turns into plain values.
    """

    event_type: ClassVar[str]

    matrix_id: str = ""
    event_id: str = field(default_factory=lambda: uuid4().hex)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        """Serialize as ``{event_type, event_id, matrix_id, occurred_at, payload}``."""
        return {
            "event_type": self.event_type,
            "event_id": self.event_id,
            "matrix_id": self.matrix_id,
            "occurred_at": self.occurred_at.isoformat(),
            "payload": self._payload(),
        }

    @abstractmethod
    def _payload(self) -> dict[str, Any]: ...
