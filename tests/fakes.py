from typing import Any, Dict, List, Optional

from pixelpond.chain.recorder import CatchRecorder
from pixelpond.core.rng import RNG
from pixelpond.game.engine import GameEngine
from pixelpond.game.scheduler import ManualScheduler
from pixelpond.game.state import GameState

ACCOUNT = "0x1234567890AbcdEF1234567890aBcdef12345678"


class FakeProvider:
    """Injected wallet provider answering from a method -> result table.

    A value that is an exception instance is raised instead of returned.
    """

    def __init__(self, chain_id: str = "0x14a34", accounts: Optional[List[str]] = None, **overrides: Any) -> None:
        self.responses: Dict[str, Any] = {
            "eth_requestAccounts": [ACCOUNT] if accounts is None else accounts,
            "eth_accounts": [ACCOUNT] if accounts is None else accounts,
            "eth_chainId": chain_id,
            "wallet_switchEthereumChain": None,
            "wallet_addEthereumChain": None,
        }
        self.responses.update(overrides)
        self.calls: List[Dict[str, Any]] = []

    async def request(self, args: Dict[str, Any]) -> Any:
        self.calls.append(args)
        result = self.responses.get(args["method"])
        if isinstance(result, Exception):
            raise result
        return result

    def methods(self) -> List[str]:
        return [c["method"] for c in self.calls]


class FakeCall:
    def __init__(self, contract: "FakeContract", args: tuple) -> None:
        self.contract = contract
        self.args = args

    async def transact(self, tx: Dict[str, Any]) -> Any:
        self.contract.calls.append((self.args, tx))
        if self.contract.error is not None:
            raise self.contract.error
        return self.contract.tx_hash


class FakeFunctions:
    def __init__(self, contract: "FakeContract") -> None:
        self._contract = contract

    def startFishing(self, location: str) -> FakeCall:  # noqa: N802 (contract ABI name)
        return FakeCall(self._contract, (location,))


class FakeContract:
    def __init__(self, error: Optional[Exception] = None, tx_hash: Any = "0xfeed") -> None:
        self.functions = FakeFunctions(self)
        self.error = error
        self.tx_hash = tx_hash
        self.calls: List[tuple] = []


def make_engine(catalog, wallet, contract=None, rng=None, events=None):
    scheduler = ManualScheduler()
    recorder = CatchRecorder(contract or FakeContract(), rng=RNG(seed=7))
    engine = GameEngine(
        wallet=wallet,
        recorder=recorder,
        catalog=catalog,
        scheduler=scheduler,
        events=events,
        rng=rng or RNG(seed=42),
    )
    return engine, scheduler


def place(engine, *fish):
    """Put ``fish`` in the pond and mark the session as casting."""
    engine.session.fish = list(fish)
    engine.session.state = GameState.CASTING
