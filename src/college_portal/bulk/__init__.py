from .coordinator import BulkUpsertCoordinator, UpsertStore, natural_key_of
from .result import BatchResult, OperationResult, WriteOutcome

__all__ = [
    "BatchResult",
    "BulkUpsertCoordinator",
    "OperationResult",
    "UpsertStore",
    "WriteOutcome",
    "natural_key_of",
]
