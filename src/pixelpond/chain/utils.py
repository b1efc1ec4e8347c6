from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Any, Dict, Optional, Union

from web3 import Web3

from ..errors import PixelPondError
from .wallet import WalletSession

logger = logging.getLogger(__name__)

GAS_BUFFER = 1.2


def format_address(address: Optional[str]) -> str:
    """Shorten an address for display: ``0x1234...abcd``."""
    if not address:
        return ""
    return f"{address[:6]}...{address[-4:]}"


def wei_to_eth(wei: Union[int, str]) -> Decimal:
    return Web3.from_wei(int(wei), "ether")


def eth_to_wei(eth: Union[int, float, str, Decimal]) -> int:
    return Web3.to_wei(Decimal(str(eth)), "ether")


async def get_current_account(session: WalletSession) -> Optional[str]:
    try:
        accounts = await session.web3.eth.accounts
    except Exception as exc:
        logger.error("Error getting current account: %s", exc)
        raise PixelPondError(f"Could not read accounts: {exc}") from exc
    return accounts[0] if accounts else None


async def has_sufficient_balance(session: WalletSession, account: str, amount: int) -> bool:
    """True if ``account`` holds at least ``amount`` wei. Provider errors count as insufficient."""
    try:
        balance = await session.web3.eth.get_balance(account)
    except Exception as exc:
        logger.error("Error checking balance: %s", exc)
        return False
    return int(balance) >= int(amount)


async def estimate_gas(session: WalletSession, transaction: Dict[str, Any]) -> int:
    """Gas estimate with a 20% safety buffer, rounded up."""
    try:
        estimate = await session.web3.eth.estimate_gas(transaction)
    except Exception as exc:
        logger.error("Error estimating gas: %s", exc)
        raise PixelPondError(f"Gas estimation failed: {exc}") from exc
    return math.ceil(estimate * GAS_BUFFER)
