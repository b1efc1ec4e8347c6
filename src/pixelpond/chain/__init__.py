from .contracts import ContractSet, init_contracts, load_abi
from .recorder import CatchRecord, CatchRecorder
from .wallet import WalletBootstrap, WalletSession

__all__ = [
    "CatchRecord",
    "CatchRecorder",
    "ContractSet",
    "WalletBootstrap",
    "WalletSession",
    "init_contracts",
    "load_abi",
]
