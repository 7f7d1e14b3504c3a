"""Value Objects for the netclient domain.

Value Objects are immutable domain primitives that:
- Have no identity (equality based on value, not reference)
- Are immutable (cannot be changed after creation)
- Validate their invariants at construction
"""

from .endpoint import Endpoint
from .retry_counting import RetryCounting
from .retry_policy import RetryPolicy
from .transport_state import TransportState
from .transport_error_code import TransportErrorCode
from .error_class import ErrorClass
from .write_result import WriteResult
from .events import ClientEvent, TransportEvent

__all__ = [
    "Endpoint",
    "RetryCounting",
    "RetryPolicy",
    "TransportState",
    "TransportErrorCode",
    "ErrorClass",
    "WriteResult",
    "ClientEvent",
    "TransportEvent",
]
