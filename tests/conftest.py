import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from pixelpond.chain.wallet import WalletSession  # noqa: E402
from pixelpond.fish.catalog import FishCatalog  # noqa: E402

from fakes import ACCOUNT, FakeProvider  # noqa: E402


@pytest.fixture
def catalog() -> FishCatalog:
    return FishCatalog.from_dict(
        {
            "default": "common",
            "fish_types": [
                {"id": "common", "probability": 0.7, "value": 1, "speed": 2, "color": "#4CAF50"},
                {"id": "rare", "probability": 0.25, "value": 5, "speed": 3, "color": "#9C27B0"},
                {"id": "legendary", "probability": 0.05, "value": 20, "speed": 4, "color": "#FFD700"},
            ],
        }
    )


@pytest.fixture
def wallet() -> WalletSession:
    return WalletSession(chain_id=84532, account=ACCOUNT, provider=FakeProvider(), web3=None)
