# models.py
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple

ZERO_HASH = "0x" + "00" * 32
EMPTY_BYTES = "0x"
DEFAULT_MAX_PER_PHASE = 10000


class ConfigError(Exception):
    """Unrecoverable startup failure: a config, key or ABI file is missing or malformed."""

    def __init__(self, path: str, reason: Any):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load {path}: {reason}")


class MintCapability(Enum):
    """Which mint-status method shape the bound contract exposes."""
    MINTING_STARTED = "mintingStarted"
    PUBLIC_MINT_ACTIVE = "isPublicMintActive"
    MINTED_SUPPLY_PAIR = "mintedTotal/supply"
    UNKNOWN = "unknown"


class ParamRole(Enum):
    TO = "to"
    AMOUNT = "amount"
    QUANTITY = "quantity"
    PHASE_ID = "phaseID"
    PRICE = "price"
    MAX_PER_TX = "maxPerTx"
    MAX_PER_USER = "maxPerUser"
    MAX_PER_PHASE = "maxPerPhase"
    NONCE = "nonce"
    SIGNATURE = "signature"
    LITERAL = None

    @classmethod
    def parse(cls, token: Any) -> "ParamRole":
        for role in cls:
            if role is not cls.LITERAL and role.value == token:
                return role
        return cls.LITERAL


def _as_list(value: Any) -> list:
    if not isinstance(value, list):
        raise TypeError(f"expected a list, got {type(value).__name__}")
    return value


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("expected an integer, got a boolean")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"expected an integer, got {value}")
    return int(value)


def _require(data: Dict[str, Any], key: str, cast, path: str):
    if key not in data:
        raise ConfigError(path, f"missing required field '{key}'")
    try:
        return cast(data[key])
    except (TypeError, ValueError, ArithmeticError) as e:
        raise ConfigError(path, f"invalid value for '{key}': {e}")


@dataclass(frozen=True)
class DropConfig:
    drop_name: str
    abi_file: str
    mint_function: str
    mint_params: Tuple[Any, ...]
    mint_quantity: int
    mint_value: str
    gas_limit: int
    max_gas_price_gwei: Decimal
    delay_ms: int
    check_interval_ms: int
    phase_id: Optional[str] = None
    price: Optional[int] = None
    max_per_tx: Optional[int] = None
    max_per_user: Optional[int] = None
    max_per_phase: Optional[int] = None
    nonce: Optional[Any] = None
    signature: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str) -> "DropConfig":
        if not isinstance(data, dict):
            raise ConfigError(path, "expected a JSON object")
        mint_params = _require(data, "mintParams", _as_list, path)
        mint_value = _require(data, "mintValue", str, path)
        try:
            Decimal(mint_value)
        except ArithmeticError:
            raise ConfigError(path, f"mintValue is not a decimal amount: {mint_value!r}")
        return cls(
            drop_name=_require(data, "dropName", str, path),
            abi_file=_require(data, "abiFile", str, path),
            mint_function=_require(data, "mintFunction", str, path),
            mint_params=tuple(mint_params),
            mint_quantity=_require(data, "mintQuantity", _as_int, path),
            mint_value=mint_value,
            gas_limit=_require(data, "gasLimit", _as_int, path),
            max_gas_price_gwei=_require(data, "maxGasPriceGwei", lambda v: Decimal(str(v)), path),
            delay_ms=_require(data, "delayMs", _as_int, path),
            check_interval_ms=_require(data, "checkIntervalMs", _as_int, path),
            phase_id=data.get("phaseID"),
            price=data.get("price"),
            max_per_tx=data.get("maxPerTx"),
            max_per_user=data.get("maxPerUser"),
            max_per_phase=data.get("maxPerPhase"),
            nonce=data.get("nonce"),
            signature=data.get("signature"),
        )


@dataclass(frozen=True)
class RpcConfig:
    rpc_url: str
    chain_id: Optional[int] = None
    proxy: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str) -> "RpcConfig":
        if not isinstance(data, dict):
            raise ConfigError(path, "expected a JSON object")
        return cls(
            rpc_url=_require(data, "rpcUrl", str, path),
            chain_id=_require(data, "chainId", _as_int, path) if data.get("chainId") is not None else None,
            proxy=data.get("proxy") or None,
        )
