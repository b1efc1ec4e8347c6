from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

from ..core.settings import ChainSettings
from ..errors import AbiLoadFailed, ContractMissingMethod, PixelPondError, UnsupportedNetwork
from .wallet import WalletSession

logger = logging.getLogger(__name__)

GAME_CONTRACT = "fishingGameNFT"
MARKETPLACE_CONTRACT = "fishMarketplace"

CATCH_METHOD = "startFishing"
LISTING_METHOD = "listFish"

AbiLoader = Callable[[str], List[Dict[str, Any]]]


@dataclass(frozen=True)
class ContractSet:
    chain_id: int
    game: Any
    marketplace: Any


def load_abi(source: str, timeout: float = 10.0) -> List[Dict[str, Any]]:
    """Load a contract ABI.

    ``source`` may be an http(s) URL, a filesystem path, or the file name of a
    packaged ABI under pixelpond/chain/abi. Both bare ABI lists and build
    artifacts with an ``abi`` key are accepted.
    """
    try:
        if source.startswith(("http://", "https://")):
            resp = requests.get(source, timeout=timeout)
            if resp.status_code >= 400:
                raise AbiLoadFailed(f"Failed to load ABI from {source}: HTTP {resp.status_code}")
            data = resp.json()
        elif Path(source).is_file():
            data = json.loads(Path(source).read_text(encoding="utf-8"))
        else:
            data = json.loads(resources.files("pixelpond.chain.abi").joinpath(source).read_text(encoding="utf-8"))
    except AbiLoadFailed:
        raise
    except (OSError, ValueError, requests.RequestException) as exc:
        raise AbiLoadFailed(f"Failed to load ABI from {source}: {exc}") from exc

    abi = data.get("abi") if isinstance(data, dict) else data
    if not isinstance(abi, list):
        raise AbiLoadFailed(f"ABI source {source} does not contain an ABI list")
    logger.debug("Loaded ABI from %s (%d entries)", source, len(abi))
    return abi


def has_method(contract: Any, name: str) -> bool:
    try:
        getattr(contract.functions, name)
    except (AttributeError, Web3Exception):
        return False
    return True


def require_method(contract: Any, name: str, label: str) -> None:
    if not has_method(contract, name):
        raise ContractMissingMethod(f"{label} contract is missing {name} method")


def init_contracts(
    session: WalletSession,
    settings: Optional[ChainSettings] = None,
    abi_loader: AbiLoader = load_abi,
) -> ContractSet:
    """Bind the game and marketplace contracts for the session's chain.

    Both contracts are checked for their entry points here, once, so a bad
    deployment or ABI fails before any gameplay starts.
    """
    settings = settings or ChainSettings()
    logger.info("Initializing contracts on chain %d...", session.chain_id)

    addresses = settings.contracts.get(str(session.chain_id))
    if not addresses:
        raise UnsupportedNetwork(
            f"Unsupported network: {session.chain_id}. Please switch to chain {settings.test_chain_id}."
        )

    try:
        bound = {}
        for name in (GAME_CONTRACT, MARKETPLACE_CONTRACT):
            abi = abi_loader(settings.abis[name])
            address = Web3.to_checksum_address(addresses[name])
            bound[name] = session.web3.eth.contract(address=address, abi=abi)
            logger.info("%s bound at %s", name, address)

        require_method(bound[GAME_CONTRACT], CATCH_METHOD, "FishingGameNFT")
        require_method(bound[MARKETPLACE_CONTRACT], LISTING_METHOD, "FishMarketplace")
    except PixelPondError:
        raise
    except (KeyError, ValueError, Web3Exception) as exc:
        raise PixelPondError(f"Failed to initialize contracts: {exc}") from exc

    logger.info("Contracts initialized successfully")
    return ContractSet(chain_id=session.chain_id, game=bound[GAME_CONTRACT], marketplace=bound[MARKETPLACE_CONTRACT])
