# main.py
import asyncio
import sys
from logger import get_logger
from chain import ChainClient, get_w3
from mint import run_mint_workers, wait_for_mint_start
from models import ConfigError
from utils import load_abi, load_drop_config, load_private_keys, load_rpc_config, prompt_contract_address

logger = get_logger("Main")


def print_banner(drop_name: str) -> None:
    print(f"\n=== NFT Auto-Mint: {drop_name} ===\n")


async def main() -> None:
    drop = load_drop_config()
    rpc_config = load_rpc_config()
    private_keys = load_private_keys()
    abi = load_abi(drop.abi_file)

    print_banner(drop.drop_name)
    contract_address = prompt_contract_address()

    logger.info(f"RPC: {rpc_config.rpc_url}")
    logger.info(f"NFT contract: {contract_address}")
    logger.info(f"Wallets loaded: {len(private_keys)}")

    w3 = get_w3(rpc_config)
    client = ChainClient(w3, contract_address, abi)

    await wait_for_mint_start(client, drop)
    await run_mint_workers(client, drop, private_keys)

    logger.info("=== Done ===")


def run() -> None:
    try:
        asyncio.run(main())
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
