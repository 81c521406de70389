import json
import logging
from unittest.mock import MagicMock

import pytest

from chain import ChainClient
from models import DropConfig

CONTRACT_ADDRESS = "0x" + "ab" * 20
PRIVATE_KEYS = ["0x" + "11" * 32, "0x" + "22" * 32, "0x" + "33" * 32]

DROP_DATA = {
    "dropName": "Test Drop",
    "abiFile": "abi.json",
    "mintFunction": "mint",
    "mintParams": ["to", "amount", "price"],
    "mintQuantity": 3,
    "mintValue": "0.01",
    "gasLimit": 300000,
    "maxGasPriceGwei": 50,
    "delayMs": 1500,
    "checkIntervalMs": 5000,
}


def fn(name, inputs=0, outputs="bool"):
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": f"arg{i}", "type": "bytes32"} for i in range(inputs)],
        "outputs": [{"name": "", "type": outputs}],
        "stateMutability": "view",
    }


MINT_FN = {
    "type": "function",
    "name": "mint",
    "inputs": [
        {"name": "to", "type": "address"},
        {"name": "amount", "type": "uint256"},
        {"name": "price", "type": "uint256"},
    ],
    "outputs": [],
    "stateMutability": "payable",
}


def make_drop(**overrides) -> DropConfig:
    data = dict(DROP_DATA, **overrides)
    return DropConfig.from_dict(data, "config.json")


def make_client(abi) -> ChainClient:
    w3 = MagicMock()
    return ChainClient(w3, CONTRACT_ADDRESS, abi)


@pytest.fixture
def drop():
    return make_drop()


@pytest.fixture
def logs(caplog):
    """Routes the script's non-propagating loggers into caplog."""
    loggers = [logging.getLogger(name) for name in ("Main", "Utils", "Chain", "Mint")]
    for lg in loggers:
        lg.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG)
    yield caplog
    for lg in loggers:
        lg.removeHandler(caplog.handler)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Working directory holding a complete, valid set of input files."""
    (tmp_path / "config.json").write_text(json.dumps(DROP_DATA), encoding="utf-8")
    (tmp_path / "rpc.json").write_text(json.dumps({"rpcUrl": "http://127.0.0.1:8545"}), encoding="utf-8")
    (tmp_path / "PrivateKeys.txt").write_text("\n".join(PRIVATE_KEYS) + "\n", encoding="utf-8")
    (tmp_path / "abi.json").write_text(json.dumps([MINT_FN, fn("mintingStarted")]), encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def no_sleep(monkeypatch):
    """Replaces asyncio.sleep with a recorder; returns the list of requested delays."""
    import asyncio
    sleeps = []

    async def fake_sleep(seconds, *args, **kwargs):
        sleeps.append(seconds)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return sleeps
