"""Result objects for comparison operations."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from xml_mapper.convert.node import ConvertibleNode


class ComparisonOperation(Enum):
    """Structural comparison operations."""

    INTERSECT = "intersect"
    DIFF = "diff"
    EQUAL = "equal"


@dataclass
class ComparisonResult:
    """Outcome of comparing two node trees.

    ``outcome`` holds the node produced by intersect or diff (``None`` when
    there is no overlap or no difference). ``equal`` is set by every
    operation: for intersect and diff it is derived from the outcome.
    """

    operation: ComparisonOperation
    outcome: Optional["ConvertibleNode"] = None
    equal: bool = False
    rendered: Optional[str] = None
    processing_time_ms: float = 0.0
    correlation_id: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

    @property
    def has_result(self) -> bool:
        """Check whether intersect or diff produced a node."""
        return self.outcome is not None

    @property
    def success(self) -> bool:
        """Check whether the comparison reached its "positive" answer.

        Intersect succeeds on any overlap, diff on no difference, equal on
        textual equality.
        """
        if self.operation is ComparisonOperation.INTERSECT:
            return self.has_result
        return self.equal

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-serializable dictionary."""
        return {
            "operation": self.operation.value,
            "success": self.success,
            "equal": self.equal,
            "has_result": self.has_result,
            "result": self.rendered,
            "processing_time_ms": round(self.processing_time_ms, 3),
            "correlation_id": self.correlation_id,
        }
