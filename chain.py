# chain.py
from typing import Any, Dict, List, Set
from requests import Session
from web3 import Web3, HTTPProvider
import config
from logger import get_logger
from models import ConfigError, MintCapability, RpcConfig

logger = get_logger("Chain")


def get_w3(rpc_config: RpcConfig) -> Web3:
    """Returns Web3 connection to RPC (with optional HTTP proxy session)."""
    if rpc_config.proxy:
        session = Session()
        session.proxies = {'http': rpc_config.proxy, 'https': rpc_config.proxy}
        provider = HTTPProvider(rpc_config.rpc_url, request_kwargs={'timeout': config.RPC_TIMEOUT}, session=session)
    else:
        provider = HTTPProvider(rpc_config.rpc_url, request_kwargs={'timeout': config.RPC_TIMEOUT})
    w3 = Web3(provider)
    if rpc_config.chain_id is not None:
        chain_id = w3.eth.chain_id
        if chain_id != rpc_config.chain_id:
            raise ConfigError(
                config.RPC_CONFIG_PATH,
                f"{rpc_config.rpc_url} reports chain_id {chain_id} (expected {rpc_config.chain_id})",
            )
    return w3


def _functions_by_arity(abi: List[Dict[str, Any]]) -> Dict[str, Set[int]]:
    functions: Dict[str, Set[int]] = {}
    for entry in abi:
        if entry.get("type", "function") != "function" or "name" not in entry:
            continue
        functions.setdefault(entry["name"], set()).add(len(entry.get("inputs", [])))
    return functions


def classify_contract(abi: List[Dict[str, Any]]) -> MintCapability:
    """Picks the mint-status method shape the ABI exposes, in priority order."""
    functions = _functions_by_arity(abi)
    if 0 in functions.get("mintingStarted", ()):
        return MintCapability.MINTING_STARTED
    if 0 in functions.get("isPublicMintActive", ()):
        return MintCapability.PUBLIC_MINT_ACTIVE
    if 1 in functions.get("mintedTotal", ()) and 0 in functions.get("supply", ()):
        return MintCapability.MINTED_SUPPLY_PAIR
    return MintCapability.UNKNOWN


class ChainClient:
    """Shared provider plus the NFT contract binding. Read-only after construction."""

    def __init__(self, w3: Web3, contract_address: str, abi: List[Dict[str, Any]]):
        self.w3 = w3
        self.address = Web3.to_checksum_address(contract_address)
        self.contract = w3.eth.contract(address=self.address, abi=abi)
        self.capability = classify_contract(abi)
        logger.debug(f"Contract {self.address} mint status via: {self.capability.value}")

    def get_balance(self, address: str) -> int:
        return self.w3.eth.get_balance(address)


def get_optimal_gas_price(w3: Web3, max_gas_price: int) -> int:
    """Network gas price capped at max_gas_price (wei). Falls back to the cap if the lookup fails."""
    try:
        gas_price = w3.eth.gas_price
        return min(int(gas_price), max_gas_price)
    except Exception as e:
        logger.warning(f"Failed to fetch gas price, using max {Web3.from_wei(max_gas_price, 'gwei')} gwei: {e}")
        return max_gas_price
