import asyncio
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from pixelpond.chain.recorder import CatchRecord, CatchRecorder
from pixelpond.core.rng import RNG
from pixelpond.core.settings import CatchSettings
from pixelpond.errors import ContractMissingMethod, TransactionFailed

from fakes import FakeContract

FIXED = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


def test_record_catch_builds_record_from_draws(wallet):
    contract = FakeContract()
    recorder = CatchRecorder(contract, CatchSettings(), RNG.scripted(randoms=[0.5], ints=[42]), clock=lambda: FIXED)
    record = asyncio.run(recorder.record_catch(wallet, "rare"))
    assert record == CatchRecord(
        type="rare",
        weight=Decimal("3.50"),
        length=42,
        location="Pixel Pond",
        timestamp=FIXED,
        tx_hash="0xfeed",
    )
    assert contract.calls == [(("Pixel Pond",), {"from": wallet.account})]


def test_event_payload_shape():
    record = CatchRecord("legendary", Decimal("1.5"), 33, "Pixel Pond", FIXED, "0xabc")
    assert record.to_event() == {
        "type": "legendary",
        "weight": "1.50",
        "length": 33,
        "location": "Pixel Pond",
        "timestamp": "2024-01-02T03:04:05.678Z",
    }


def test_weight_and_length_stay_in_range(wallet):
    recorder = CatchRecorder(FakeContract(), rng=RNG(seed=11))
    for _ in range(200):
        record = asyncio.run(recorder.record_catch(wallet, "common"))
        assert Decimal("1.00") <= record.weight <= Decimal("6.00")
        assert record.weight == record.weight.quantize(Decimal("0.01"))
        assert 20 <= record.length <= 69


def test_rejected_transaction_raises(wallet):
    recorder = CatchRecorder(FakeContract(error=RuntimeError("User denied transaction signature")))
    with pytest.raises(TransactionFailed) as excinfo:
        asyncio.run(recorder.record_catch(wallet, "common"))
    assert "User denied" in str(excinfo.value)


def test_missing_catch_method_is_rejected_up_front():
    with pytest.raises(ContractMissingMethod):
        CatchRecorder(SimpleNamespace(functions=SimpleNamespace()))


def test_bytes_tx_hash_is_hex_encoded(wallet):
    recorder = CatchRecorder(FakeContract(tx_hash=b"\xfe\xed"))
    record = asyncio.run(recorder.record_catch(wallet, "common"))
    assert record.tx_hash == "0xfeed"
