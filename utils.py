# utils.py
import json
from typing import Any, Callable, List
from web3 import Web3
import config
from logger import get_logger
from models import ConfigError, DropConfig, RpcConfig

logger = get_logger("Utils")


def shorten_address(address: str) -> str:
    return f"{address[:6]}...{address[-4:]}"


def _read_text(path: str) -> str:
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise ConfigError(path, e)


def _read_json(path: str) -> Any:
    try:
        return json.loads(_read_text(path))
    except json.JSONDecodeError as e:
        raise ConfigError(path, e)


def load_drop_config(path: str = config.DROP_CONFIG_PATH) -> DropConfig:
    """Loads the drop settings (mint function, params, gas, delays) from JSON."""
    drop = DropConfig.from_dict(_read_json(path), path)
    logger.debug(f"Loaded drop config '{drop.drop_name}' from {path}")
    return drop


def load_rpc_config(path: str = config.RPC_CONFIG_PATH) -> RpcConfig:
    return RpcConfig.from_dict(_read_json(path), path)


def load_private_keys(path: str = config.PRIVATE_KEYS_PATH) -> List[str]:
    """Loads private keys, one per line. Order is kept, blank lines are dropped, duplicates stay."""
    keys = [line.strip() for line in _read_text(path).splitlines()]
    return [key for key in keys if key]


def load_abi(path: str) -> Any:
    """Loads contract ABI from JSON file. Build artifacts ({"abi": [...]}) are unwrapped."""
    abi = _read_json(path)
    if isinstance(abi, dict) and "abi" in abi:
        abi = abi["abi"]
    if not isinstance(abi, list):
        raise ConfigError(path, "ABI must be a JSON array of contract entries")
    return abi


def prompt_contract_address(input_func: Callable[[str], str] = input) -> str:
    """Asks for the NFT contract address until a well-formed one is entered. Returns it checksummed."""
    while True:
        value = input_func("Enter NFT contract address: ").strip()
        if Web3.is_address(value):
            return Web3.to_checksum_address(value)
        print("Invalid contract address, please try again.\n")
