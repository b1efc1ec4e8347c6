from pathlib import Path

from pixelpond.core.settings import CatchSettings, ChainSettings, GameplaySettings, Settings, ViewportSettings


def test_defaults_load():
    s = Settings.load()
    assert s.viewport.width == 800
    assert s.viewport.height == 600
    assert s.gameplay.min_active == 2
    assert (s.gameplay.spawn_min, s.gameplay.spawn_max) == (2, 4)
    assert s.gameplay.dwell_delay == 1.0
    assert s.catch.location == "Pixel Pond"
    assert s.chain.allowed_chain_ids == (84532, 8453)
    assert s.chain.provider_keys == ["coinbaseWalletExtension", "ethereum"]
    assert set(s.chain.contracts) == {"84532", "8453"}


def test_user_override_merges(tmp_path: Path):
    user = tmp_path / "user.yaml"
    user.write_text(
        "viewport:\n"
        "  width: 1024\n"
        "chain:\n"
        "  contracts:\n"
        "    31337:\n"
        "      fishingGameNFT: '0x0000000000000000000000000000000000000001'\n"
        "      fishMarketplace: '0x0000000000000000000000000000000000000002'\n",
        encoding="utf-8",
    )
    s = Settings.load(user)
    assert s.viewport.width == 1024
    assert s.viewport.height == 600
    # numeric YAML keys are normalized and merged with the defaults
    assert {"84532", "8453", "31337"} <= set(s.chain.contracts)
    assert s.chain.add_chain.chain_name == "Base Sepolia Testnet"


def test_missing_user_file_falls_back_to_defaults(tmp_path: Path):
    s = Settings.load(tmp_path / "nope.yaml")
    assert s.viewport.width == 800


def test_packaged_defaults_agree_with_dataclass_defaults():
    s = Settings.load()
    assert s.viewport == ViewportSettings()
    assert s.gameplay == GameplaySettings()
    assert s.catch == CatchSettings()
    assert s.chain.add_chain == ChainSettings().add_chain
