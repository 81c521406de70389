# mint.py
import asyncio
from decimal import Decimal
from typing import Any, Callable, Dict, List

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3

import config
from chain import ChainClient, get_optimal_gas_price
from logger import get_logger
from models import DEFAULT_MAX_PER_PHASE, EMPTY_BYTES, ZERO_HASH, DropConfig, MintCapability, ParamRole
from utils import shorten_address

logger = get_logger("Mint")


def _phase_id(drop: DropConfig) -> str:
    return drop.phase_id or ZERO_HASH


# Each role resolves from the wallet address and the drop config; falsy values fall back to defaults
PARAM_RESOLVERS: Dict[ParamRole, Callable[[str, DropConfig], Any]] = {
    ParamRole.TO: lambda address, drop: address,
    ParamRole.AMOUNT: lambda address, drop: drop.mint_quantity,
    ParamRole.QUANTITY: lambda address, drop: drop.mint_quantity,
    ParamRole.PHASE_ID: lambda address, drop: _phase_id(drop),
    ParamRole.PRICE: lambda address, drop: drop.price or 0,
    ParamRole.MAX_PER_TX: lambda address, drop: drop.max_per_tx or drop.mint_quantity,
    ParamRole.MAX_PER_USER: lambda address, drop: drop.max_per_user or drop.mint_quantity,
    ParamRole.MAX_PER_PHASE: lambda address, drop: drop.max_per_phase or DEFAULT_MAX_PER_PHASE,
    ParamRole.NONCE: lambda address, drop: drop.nonce or ZERO_HASH,
    ParamRole.SIGNATURE: lambda address, drop: drop.signature or EMPTY_BYTES,
}


def build_mint_params(drop: DropConfig, wallet_address: str) -> List[Any]:
    """Maps drop.mint_params tokens to positional arguments. Unknown tokens are passed as-is."""
    params = []
    for token in drop.mint_params:
        role = ParamRole.parse(token)
        if role is ParamRole.LITERAL:
            params.append(token)
        else:
            params.append(PARAM_RESOLVERS[role](wallet_address, drop))
    return params


def is_mint_active(client: ChainClient, drop: DropConfig) -> bool:
    """Asks the contract whether minting is open. Never raises: errors count as not active."""
    functions = client.contract.functions
    try:
        if client.capability is MintCapability.MINTING_STARTED:
            return bool(functions.mintingStarted().call())
        if client.capability is MintCapability.PUBLIC_MINT_ACTIVE:
            return bool(functions.isPublicMintActive().call())
        if client.capability is MintCapability.MINTED_SUPPLY_PAIR:
            phase_id = _phase_id(drop)
            minted = functions.mintedTotal(phase_id).call()
            supply = functions.supply().call()
            if minted >= supply:
                logger.warning(f"Mint already finished for phaseID {phase_id} ({minted}/{supply}). Check the phaseID!")
            return minted < supply
        logger.warning("No mint status function found in ABI, assuming mint is active")
        return True
    except Exception as e:
        logger.warning(f"Mint status check failed. phaseID ({drop.phase_id}) may be wrong: {e}")
        logger.warning(config.PHASE_ID_HINT)
        return False


def mint_nfts(wallet: LocalAccount, client: ChainClient, wallet_address: str, drop: DropConfig) -> None:
    """Sends one mint transaction for the wallet and waits for it. Failures are logged, never raised."""
    wallet_short = shorten_address(wallet_address)
    try:
        logger.info(f"Minting {drop.mint_quantity} NFT(s) for {wallet_short}")
        w3 = client.w3
        params = build_mint_params(drop, wallet.address)

        max_gas_price = Web3.to_wei(drop.max_gas_price_gwei, "gwei")
        gas_price = get_optimal_gas_price(w3, max_gas_price)
        value = Web3.to_wei(Decimal(drop.mint_value), "ether")
        logger.debug(
            f"{wallet_short}: {drop.mint_function}{tuple(params)}, "
            f"gas price {Web3.from_wei(gas_price, 'gwei')} gwei, value {drop.mint_value}"
        )

        txn = getattr(client.contract.functions, drop.mint_function)(*params).build_transaction({
            "from": wallet.address,
            "nonce": w3.eth.get_transaction_count(wallet.address, "pending"),
            "gas": drop.gas_limit,
            "gasPrice": gas_price,
            "value": value,
        })
        signed_txn = w3.eth.account.sign_transaction(txn, wallet.key)
        tx_hash = w3.eth.send_raw_transaction(signed_txn.raw_transaction)
        logger.info(f"Transaction sent ({wallet_short}), tx: {Web3.to_hex(tx_hash)}")

        receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=config.TX_TIMEOUT)
        if receipt["status"] == 1:
            logger.info(f"Mint successful for {wallet_short}, tx: {Web3.to_hex(receipt['transactionHash'])}")
        else:
            logger.error(f"Mint failed for {wallet_address}: transaction reverted, tx: {Web3.to_hex(tx_hash)}")
    except Exception as e:
        logger.error(f"Mint failed for {wallet_address}: {e}")
        if "phaseID" in str(e):
            logger.warning(config.PHASE_ID_HINT)


async def wait_for_mint_start(client: ChainClient, drop: DropConfig) -> None:
    """Polls the contract every check_interval_ms until minting is open. No retry limit."""
    logger.info("Checking mint status...")
    active = is_mint_active(client, drop)
    if active:
        return

    logger.warning("Mint has not started yet, waiting for it...")
    while not active:
        logger.info(f"Checking again in {drop.check_interval_ms / 1000} seconds...")
        await asyncio.sleep(drop.check_interval_ms / 1000)
        active = is_mint_active(client, drop)
    logger.info("Mint is live! Starting minting...")


async def _process_wallet(private_key: str, index: int, total: int, client: ChainClient, drop: DropConfig) -> None:
    try:
        wallet = Account.from_key(private_key)
        logger.info(f"Wallet {index}/{total}: {wallet.address}")
        balance = client.get_balance(wallet.address)
    except Exception as e:
        logger.error(f"Wallet #{index}: {e}")
        return

    if balance == 0:
        logger.error(f"Wallet #{index} ({shorten_address(wallet.address)}): zero native balance, skipping")
        return

    mint_nfts(wallet, client, wallet.address, drop)


async def run_mint_workers(client: ChainClient, drop: DropConfig, private_keys: List[str]) -> None:
    """Mints for each wallet strictly in key-file order, pausing delay_ms between wallets."""
    total = len(private_keys)
    for index, private_key in enumerate(private_keys, start=1):
        await _process_wallet(private_key, index, total, client, drop)
        if index < total:
            logger.info(f"Waiting {drop.delay_ms}ms before next wallet...")
            await asyncio.sleep(drop.delay_ms / 1000)
