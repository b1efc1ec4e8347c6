import asyncio
from decimal import Decimal
from types import SimpleNamespace

import pytest

from pixelpond.chain.utils import (
    estimate_gas,
    eth_to_wei,
    format_address,
    get_current_account,
    has_sufficient_balance,
    wei_to_eth,
)
from pixelpond.chain.wallet import WalletSession
from pixelpond.errors import PixelPondError

from fakes import ACCOUNT, FakeProvider


class FakeEth:
    def __init__(self, accounts=(), balance=0, gas=0, error=None):
        self._accounts = list(accounts)
        self._balance = balance
        self._gas = gas
        self._error = error

    async def _answer(self, value):
        if self._error is not None:
            raise self._error
        return value

    @property
    def accounts(self):
        return self._answer(self._accounts)

    def get_balance(self, account):
        return self._answer(self._balance)

    def estimate_gas(self, transaction):
        return self._answer(self._gas)


def session_with(**eth):
    return WalletSession(84532, ACCOUNT, FakeProvider(), web3=SimpleNamespace(eth=FakeEth(**eth)))


def test_format_address():
    assert format_address(ACCOUNT) == "0x1234...5678"
    assert format_address("") == ""
    assert format_address(None) == ""


def test_unit_conversion():
    assert wei_to_eth(10**18) == Decimal(1)
    assert wei_to_eth("1500000000000000000") == Decimal("1.5")
    assert eth_to_wei("0.5") == 5 * 10**17
    assert eth_to_wei(1) == 10**18


def test_get_current_account():
    assert asyncio.run(get_current_account(session_with(accounts=[ACCOUNT]))) == ACCOUNT
    assert asyncio.run(get_current_account(session_with(accounts=[]))) is None
    with pytest.raises(PixelPondError):
        asyncio.run(get_current_account(session_with(error=RuntimeError("locked"))))


def test_has_sufficient_balance():
    session = session_with(balance=10**18)
    assert asyncio.run(has_sufficient_balance(session, ACCOUNT, 10**18))
    assert not asyncio.run(has_sufficient_balance(session, ACCOUNT, 10**18 + 1))
    assert not asyncio.run(has_sufficient_balance(session_with(error=RuntimeError("rpc down")), ACCOUNT, 1))


def test_estimate_gas_adds_buffer():
    assert asyncio.run(estimate_gas(session_with(gas=21000), {"to": ACCOUNT})) == 25200
    assert asyncio.run(estimate_gas(session_with(gas=50001), {"to": ACCOUNT})) == 60002
    with pytest.raises(PixelPondError):
        asyncio.run(estimate_gas(session_with(error=RuntimeError("reverted")), {"to": ACCOUNT}))
