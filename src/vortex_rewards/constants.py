"""Root Network and storage constants."""

from decimal import Decimal

DEFAULT_ROOT_RPC_URL = "https://root.rootnet.live/archive"
DEFAULT_PORCINI_RPC_URL = "https://porcini.rootnet.app/archive"
DEFAULT_LOCAL_RPC_URL = "http://127.0.0.1:9944"

DEFAULT_MONGODB_URI = "mongodb://localhost:27017"
DEFAULT_MONGODB_DB = "vortex"

ASSET_PRICES_COLLECTION = "asset-prices"
REWARD_CYCLE_COLLECTION = "reward-cycle"

# Asset ids on Root Network
ROOT_ASSET_ID = 1
VTX_ASSET_ID = 3

# Total bootstrap for distribution cycle 6, in ROOT native units. There is no
# on-chain lookup for the per-cycle bootstrap yet, so it is supplied as config.
DEFAULT_BOOTSTRAP_ROOT = Decimal(17057307006875)

VORTEX_PALLET = "VortexDistribution"
ASSETS_PALLET = "Assets"
