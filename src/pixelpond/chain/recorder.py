from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from web3 import Web3

from ..core.rng import RNG
from ..core.settings import CatchSettings
from ..errors import TransactionFailed
from .contracts import CATCH_METHOD, require_method
from .wallet import WalletSession

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


@dataclass(frozen=True)
class CatchRecord:
    """Result of one recorded catch.

    weight and length are generated locally for display and are not read back
    from the ledger.
    """

    type: str
    weight: Decimal
    length: int
    location: str
    timestamp: datetime
    tx_hash: Optional[str] = None

    def to_event(self) -> Dict[str, Any]:
        """Payload for the ``fish_caught`` event; key names are part of the UI contract."""
        return {
            "type": self.type,
            "weight": f"{self.weight:.2f}",
            "length": self.length,
            "location": self.location,
            "timestamp": self.timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        }


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CatchRecorder:
    """Mint a catch on the game contract and build the matching CatchRecord."""

    def __init__(
        self,
        contract: Any,
        settings: Optional[CatchSettings] = None,
        rng: Optional[RNG] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        require_method(contract, CATCH_METHOD, "FishingGameNFT")
        self.contract = contract
        self.settings = settings or CatchSettings()
        self.rng = rng or RNG()
        self.clock = clock

    async def record_catch(self, wallet: WalletSession, category: str) -> CatchRecord:
        """Submit the catch-mint call and wait until the ledger accepts it.

        Raises:
            TransactionFailed: the call was rejected or errored.
        """
        location = self.settings.location
        logger.info("Recording %s catch at %s for %s", category, location, wallet.account)
        try:
            call = getattr(self.contract.functions, CATCH_METHOD)(location)
            tx_hash = await call.transact({"from": wallet.account})
        except Exception as exc:
            logger.error("Catch transaction failed: %s", exc)
            raise TransactionFailed(f"Failed to record {category} catch: {exc}") from exc

        record = CatchRecord(
            type=category,
            weight=self._draw_weight(),
            length=self.rng.randint(self.settings.length_min, self.settings.length_max),
            location=location,
            timestamp=self.clock(),
            tx_hash=tx_hash if isinstance(tx_hash, str) or tx_hash is None else Web3.to_hex(tx_hash),
        )
        logger.info("Catch recorded in tx %s: %s", record.tx_hash, record.to_event())
        return record

    def _draw_weight(self) -> Decimal:
        weight = self.rng.uniform(self.settings.weight_min, self.settings.weight_max)
        return Decimal(weight).quantize(CENT)
