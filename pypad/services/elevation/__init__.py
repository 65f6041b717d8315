from .credential_cache import CredentialCache
from .privileged_writer import PrivilegedWriter
from .sudo_helper import SudoHelper

__all__ = [
    "CredentialCache",
    "PrivilegedWriter",
    "SudoHelper",
]
