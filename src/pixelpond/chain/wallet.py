from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from web3 import AsyncWeb3, Web3

from ..core.settings import ChainSettings
from ..errors import (
    AuthorizationFailed,
    NetworkAddFailed,
    NetworkError,
    NetworkSwitchFailed,
    ProviderMissing,
)
from .providers import Eip1193Provider, InjectedProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalletSession:
    """An authorized account on an allow-listed chain.

    Created once per successful bootstrap and never refreshed: if the wallet
    changes chain afterwards the session is stale.
    """

    chain_id: int
    account: str
    provider: InjectedProvider = field(repr=False)
    web3: AsyncWeb3 = field(repr=False, compare=False)


def detect_provider(environment: Mapping[str, Any], keys: Tuple[str, ...]) -> Tuple[str, InjectedProvider]:
    """Return the first wallet provider present in ``environment`` by priority order."""
    for key in keys:
        provider = environment.get(key)
        if provider is not None:
            logger.info("Wallet provider detected: %s", key)
            return key, provider
    logger.error("No wallet provider detected (looked for %s)", ", ".join(keys))
    raise ProviderMissing(
        f"No Ethereum provider detected. Install one of: {', '.join(keys)}."
    )


def parse_chain_id(value: Any) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.lower().startswith("0x"):
        return Web3.to_int(hexstr=value)
    return int(value)


class WalletBootstrap:
    """Connect to a wallet and make sure it is on an allow-listed chain.

    Every call to ``bootstrap()`` runs the whole protocol again and any failure
    ends that attempt; nothing is retried.

    1. probe the environment for a provider (primary, then secondary)
    2. request account authorization
    3. read the active chain id
    4. accept it if allow-listed, otherwise switch to the test network,
       registering it with the wallet when the wallet does not know it
    """

    def __init__(self, environment: Mapping[str, Any], settings: Optional[ChainSettings] = None) -> None:
        self.environment = environment
        self.settings = settings or ChainSettings()

    async def bootstrap(self) -> WalletSession:
        logger.info("Bootstrapping wallet connection...")
        _, provider = detect_provider(self.environment, tuple(self.settings.provider_keys))

        account = await self._authorize(provider)
        logger.info("Authorized account %s", account)

        chain_id = await self._read_chain_id(provider)
        logger.info("Current chain id: %d", chain_id)

        if chain_id not in self.settings.allowed_chain_ids:
            await self._switch_to_test_network(provider)
            chain_id = self.settings.test_chain_id

        web3 = AsyncWeb3(Eip1193Provider(provider))
        session = WalletSession(chain_id=chain_id, account=account, provider=provider, web3=web3)
        logger.info("Wallet bootstrap complete on chain %d", chain_id)
        return session

    async def _authorize(self, provider: InjectedProvider) -> str:
        logger.debug("Requesting account access...")
        try:
            accounts = await provider.request({"method": "eth_requestAccounts"})
        except Exception as exc:
            logger.error("Account access request failed: %s", exc)
            raise AuthorizationFailed(f"Account access was not granted: {exc}") from exc
        if not accounts:
            raise AuthorizationFailed("No accounts found. Please connect your wallet.")
        return accounts[0]

    async def _read_chain_id(self, provider: InjectedProvider) -> int:
        logger.debug("Checking network...")
        try:
            return parse_chain_id(await provider.request({"method": "eth_chainId"}))
        except Exception as exc:
            logger.error("Reading the active chain failed: %s", exc)
            raise NetworkError(f"Could not read the active chain id: {exc}") from exc

    async def _switch_to_test_network(self, provider: InjectedProvider) -> None:
        target = Web3.to_hex(self.settings.test_chain_id)
        logger.info("Switching wallet to chain %s...", target)
        try:
            await provider.request(
                {"method": "wallet_switchEthereumChain", "params": [{"chainId": target}]}
            )
            return
        except Exception as exc:
            if getattr(exc, "code", None) != self.settings.unrecognized_chain_code:
                logger.error("Chain switch failed: %s", exc)
                raise NetworkSwitchFailed(
                    f"Failed to switch to chain {target}. Please try manually."
                ) from exc
            logger.info("Wallet does not know chain %s; adding it", target)

        try:
            await provider.request(
                {"method": "wallet_addEthereumChain", "params": [self.add_chain_params()]}
            )
        except Exception as exc:
            logger.error("Adding chain %s failed: %s", target, exc)
            raise NetworkAddFailed(
                f"Please add {self.settings.add_chain.chain_name} to your wallet manually."
            ) from exc

    def add_chain_params(self) -> Dict[str, Any]:
        add = self.settings.add_chain
        return {
            "chainId": Web3.to_hex(self.settings.test_chain_id),
            "chainName": add.chain_name,
            "nativeCurrency": {
                "name": add.currency_name,
                "symbol": add.currency_symbol,
                "decimals": add.currency_decimals,
            },
            "rpcUrls": [add.rpc_url],
            "blockExplorerUrls": [add.explorer_url],
        }
