from typing import Literal

from pydantic_settings import BaseSettings

PUBLIC_RPC_URLS = {
    "mainnet": "https://mainnet.base.org",
    "sepolia": "https://sepolia.base.org",
}

ALCHEMY_RPC_URLS = {
    "mainnet": "https://base-mainnet.g.alchemy.com/v2/{key}",
    "sepolia": "https://base-sepolia.g.alchemy.com/v2/{key}",
}

CHAIN_IDS = {
    "mainnet": 8453,
    "sepolia": 84532,
}

EXPLORER_URLS = {
    "mainnet": "https://basescan.org",
    "sepolia": "https://sepolia.basescan.org",
}


class Settings(BaseSettings):
    alchemy_api_key: str = ""
    base_rpc_url_override: str = ""
    network: Literal["mainnet", "sepolia"] = "mainnet"
    rpc_timeout: float = 5.0
    batch_size: int = 100
    batch_concurrency: int = 10
    registry_path: str = ""
    log_level: str = "INFO"

    @property
    def base_rpc_url(self) -> str:
        if self.base_rpc_url_override:
            return self.base_rpc_url_override
        if self.alchemy_api_key:
            return ALCHEMY_RPC_URLS[self.network].format(key=self.alchemy_api_key)
        return PUBLIC_RPC_URLS[self.network]

    @property
    def chain_id(self) -> int:
        return CHAIN_IDS[self.network]

    @property
    def explorer_url(self) -> str:
        return EXPLORER_URLS[self.network]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
