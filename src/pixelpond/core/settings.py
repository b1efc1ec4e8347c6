from __future__ import annotations

import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass
class ViewportSettings:
    width: int = 800
    height: int = 600
    title: str = "Pixel Pond"
    vsync: bool = True


@dataclass
class GameplaySettings:
    """Spawning and pacing knobs for the fishing session.

    Attributes:
        min_active: Population floor; a new batch spawns when the active set drops below it.
        spawn_min/spawn_max: Inclusive range for the size of one spawn batch.
        band_top/band_bottom: Vertical spawn band as fractions of the viewport height.
        fish_width/fish_height: Bounding box of every spawned fish.
        dwell_delay: Seconds spent in the caught state before casting resumes.
    """

    min_active: int = 2
    spawn_min: int = 2
    spawn_max: int = 4
    band_top: float = 0.2
    band_bottom: float = 0.8
    fish_width: float = 100
    fish_height: float = 50
    dwell_delay: float = 1.0


@dataclass
class CatchSettings:
    location: str = "Pixel Pond"
    weight_min: float = 1.0
    weight_max: float = 6.0
    length_min: int = 20
    length_max: int = 69


@dataclass
class AddChainSettings:
    chain_name: str = "Base Sepolia Testnet"
    currency_name: str = "ETH"
    currency_symbol: str = "ETH"
    currency_decimals: int = 18
    rpc_url: str = "https://sepolia.base.org"
    explorer_url: str = "https://sepolia.basescan.org"


@dataclass
class ChainSettings:
    provider_keys: List[str] = field(default_factory=lambda: ["coinbaseWalletExtension", "ethereum"])
    test_chain_id: int = 84532
    production_chain_id: int = 8453
    unrecognized_chain_code: int = 4902
    add_chain: AddChainSettings = field(default_factory=AddChainSettings)
    contracts: Dict[str, Dict[str, str]] = field(default_factory=dict)
    abis: Dict[str, str] = field(
        default_factory=lambda: {
            "fishingGameNFT": "FishingGameNFT.json",
            "fishMarketplace": "FishMarketplace.json",
        }
    )

    @property
    def allowed_chain_ids(self) -> tuple[int, int]:
        return self.test_chain_id, self.production_chain_id


@dataclass
class AssetSettings:
    background: Optional[str] = None
    fishing_rod: Optional[str] = None
    fish: Dict[str, str] = field(default_factory=dict)


@dataclass
class Settings:
    viewport: ViewportSettings = field(default_factory=ViewportSettings)
    gameplay: GameplaySettings = field(default_factory=GameplaySettings)
    catch: CatchSettings = field(default_factory=CatchSettings)
    chain: ChainSettings = field(default_factory=ChainSettings)
    assets: AssetSettings = field(default_factory=AssetSettings)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        chain_data = dict(data.get("chain", {}))
        add_chain = AddChainSettings(**chain_data.pop("add_chain", {}))
        # YAML may parse numeric chain ids as ints; the address book is keyed by str
        contracts = {str(k): dict(v) for k, v in (chain_data.pop("contracts", {}) or {}).items()}
        chain = ChainSettings(add_chain=add_chain, contracts=contracts, **chain_data)
        assets_data = data.get("assets", {}) or {}
        assets = AssetSettings(
            background=assets_data.get("background"),
            fishing_rod=assets_data.get("fishing_rod"),
            fish=dict(assets_data.get("fish") or {}),
        )
        return Settings(
            viewport=ViewportSettings(**data.get("viewport", {})),
            gameplay=GameplaySettings(**data.get("gameplay", {})),
            catch=CatchSettings(**data.get("catch", {})),
            chain=chain,
            assets=assets,
        )

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load settings from built-in defaults and optional user override file.

        If user_path is provided and exists, overlay values onto defaults.
        """
        defaults = resources.files("pixelpond.config").joinpath("default_settings.yaml").read_text(encoding="utf-8")
        default_data = yaml.safe_load(defaults) or {}

        user_data = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        settings = cls._from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings
