"""
Configuration settings - edit defaults here, override with environment variables
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    """Application settings"""
    
    # ===================
    # NEAR RPC
    # ===================
    # NEAR nodes serve JSON-RPC over HTTP; ws:// or wss:// is only for a JSON-RPC WebSocket gateway
    rpc_url: str = "https://archival-rpc.mainnet.near.org"
    rpc_timeout: float = 30.0
    
    # ===================
    # Queries
    # ===================
    nft_page_limit_max: int = 100
    
    # ===================
    # Logging
    # ===================
    log_level: str = "INFO"
    
    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            rpc_url=os.getenv("RPC_URL", defaults.rpc_url),
            rpc_timeout=float(os.getenv("RPC_TIMEOUT", defaults.rpc_timeout)),
            nft_page_limit_max=int(os.getenv("NFT_PAGE_LIMIT_MAX", defaults.nft_page_limit_max)),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        )


# Global settings instance - import this
settings = Settings.from_env()
