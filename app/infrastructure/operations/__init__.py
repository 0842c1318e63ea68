"""Operation result types and status enums.

Uniform result types returned by infrastructure clients so that callers can
branch on outcome without catching provider-specific exceptions.
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
