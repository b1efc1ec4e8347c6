import asyncio
import logging

import pytest

from pixelpond.app import InventoryLog, PondApp, Screen, build_environment
from pixelpond.chain.providers import HttpWalletProvider
from pixelpond.core.events import FISH_CAUGHT, EventBus
from pixelpond.core.rng import RNG
from pixelpond.core.settings import Settings
from pixelpond.errors import AssetLoadFailed, AuthorizationFailed, ProviderMissing
from pixelpond.game.scheduler import ManualScheduler
from pixelpond.game.state import GameState
from pixelpond.ui.assets import AssetLoader

from fakes import ACCOUNT, FakeProvider


def make_app(catalog, environment, settings=None, assets=None):
    settings = settings or Settings.load()
    scheduler = ManualScheduler()
    app = PondApp(settings, environment, scheduler, catalog=catalog, rng=RNG(seed=5), assets=assets)
    return app, scheduler


def test_connect_starts_the_game(catalog):
    app, scheduler = make_app(catalog, {"ethereum": FakeProvider()})
    assert app.screen is Screen.WELCOME
    engine = asyncio.run(app.connect())
    assert app.screen is Screen.GAME
    assert app.engine is engine
    assert app.wallet.account == ACCOUNT
    assert app.contracts.chain_id == 84532
    assert engine.state is GameState.CASTING
    assert scheduler.pending_frames == 1


def test_connect_without_provider_stays_on_welcome(catalog):
    app, _ = make_app(catalog, {})
    with pytest.raises(ProviderMissing):
        asyncio.run(app.connect())
    assert app.screen is Screen.WELCOME
    assert app.engine is None


def test_connect_can_be_retried(catalog):
    provider = FakeProvider(accounts=[])
    app, _ = make_app(catalog, {"ethereum": provider})
    with pytest.raises(AuthorizationFailed):
        asyncio.run(app.connect())
    provider.responses["eth_requestAccounts"] = [ACCOUNT]
    asyncio.run(app.connect())
    assert app.screen is Screen.GAME


def test_asset_failure_aborts_connect(catalog):
    settings = Settings.load()
    settings.assets.background = "missing/background.png"

    def broken_loader(path):
        raise FileNotFoundError(path)

    app, _ = make_app(catalog, {"ethereum": FakeProvider()}, settings, AssetLoader(settings.assets, broken_loader))
    with pytest.raises(AssetLoadFailed):
        asyncio.run(app.connect())
    assert app.screen is Screen.WELCOME
    assert app.engine is None


def test_screens_pause_and_resume_the_session(catalog):
    app, _ = make_app(catalog, {"ethereum": FakeProvider()})
    engine = asyncio.run(app.connect())

    app.show_inventory()
    assert app.screen is Screen.INVENTORY
    assert engine.state is GameState.IDLE
    assert app.on_pointer(10, 10) is None

    app.show_marketplace()
    assert app.screen is Screen.MARKETPLACE

    app.show_game()
    assert app.screen is Screen.GAME
    assert engine.state is GameState.CASTING


def test_inventory_log_announces_catches(caplog):
    events = EventBus()
    inventory = InventoryLog(events)
    payload = {"type": "rare", "weight": "2.50", "length": 30, "location": "Pixel Pond", "timestamp": "t"}
    with caplog.at_level(logging.INFO, logger="pixelpond.app"):
        events.publish(FISH_CAUGHT, payload)
    assert inventory.catches == [payload]
    assert "Caught a rare fish! Weight: 2.50kg, Length: 30cm" in caplog.text


def test_build_environment():
    assert build_environment(None) == {}
    env = build_environment("http://localhost:8545")
    assert isinstance(env["ethereum"], HttpWalletProvider)
