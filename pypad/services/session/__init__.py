from .document_session import DocumentSession
from .outcomes import InputKind, InputRequest, Outcome, Status

__all__ = [
    "DocumentSession",
    "InputKind",
    "InputRequest",
    "Outcome",
    "Status",
]
