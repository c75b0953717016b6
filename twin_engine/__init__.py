"""
twin_engine: decode on-chain digital twin objects and drive their
transaction lifecycle (submit -> await finality -> refresh).
"""
from .config import ContractConfig, ContractMethod, SessionConfig
from .decoding import decode_bytes_like_field, decode_twin_record
from .runtime import TwinSession

__all__ = [
    "ContractConfig",
    "ContractMethod",
    "SessionConfig",
    "decode_bytes_like_field",
    "decode_twin_record",
    "TwinSession",
]

__version__ = "0.1.0"
