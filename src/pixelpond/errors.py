from typing import Optional


class PixelPondError(Exception):
    """Base error for Pixel Pond domain exceptions."""


class ProviderMissing(PixelPondError):
    """Raised when no compatible wallet provider is present in the host environment."""


class AuthorizationFailed(PixelPondError):
    """Raised when the wallet refuses account access or returns no accounts."""


class NetworkError(PixelPondError):
    """Base for failures resolving the active chain to an allow-listed one."""


class UnsupportedNetwork(NetworkError):
    """Raised when the active chain has no configured contract deployment."""


class NetworkSwitchFailed(NetworkError):
    """Raised when the wallet rejects a chain switch for a reason other than an unknown chain."""


class NetworkAddFailed(NetworkError):
    """Raised when registering the test network with the wallet fails."""


class ContractMissingMethod(PixelPondError):
    """Raised when a contract handle lacks an expected entry point."""


class AbiLoadFailed(PixelPondError):
    """Raised when a contract ABI cannot be read or parsed."""


class TransactionFailed(PixelPondError):
    """Raised when the catch-mint call is rejected or errors."""


class AssetLoadFailed(PixelPondError):
    """Raised when game textures fail to load and the session cannot start."""


class CatalogError(PixelPondError):
    """Raised for an invalid fish catalog configuration."""


class ProviderRpcError(Exception):
    """Error reported by a wallet provider for a single RPC request.

    Mirrors the EIP-1193 error shape: an integer ``code`` and a message.
    """

    def __init__(self, code: int, message: str, data: Optional[object] = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
