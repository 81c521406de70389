# config.py
# Script settings. Per-drop parameters live in config.json / rpc.json.

# Drop configuration (mint function, params, gas, delays)
DROP_CONFIG_PATH = "config.json"

# RPC endpoint: {"rpcUrl": "...", "chainId": optional, "proxy": optional}
RPC_CONFIG_PATH = "rpc.json"

# One private key per line, blank lines ignored
PRIVATE_KEYS_PATH = "PrivateKeys.txt"

# Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
LOG_LEVEL = "INFO"

# Log file path
LOG_FILE = "mint_log.txt"

# Seconds to wait for a mint receipt (None waits until the tx is mined)
TX_TIMEOUT = None

# HTTP timeout for RPC requests in seconds
RPC_TIMEOUT = 30

# Shown whenever a failure looks like a wrong phaseID
PHASE_ID_HINT = "phaseID may be wrong. Check the drop page or the project's announcements for the current phaseID"
