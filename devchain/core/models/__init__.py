from .compiler import CompilerSpec
from .config_root import ConfigRoot
from .network import WILDCARD_NETWORK_ID, NetworkProfile

__all__ = ["ConfigRoot", "NetworkProfile", "CompilerSpec", "WILDCARD_NETWORK_ID"]
