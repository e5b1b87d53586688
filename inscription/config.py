"""Configuration management for the inscription toolkit."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from web3 import Web3

# Load environment variables from .env file if present
load_dotenv()

SEPOLIA_CHAIN_ID = 11155111


@dataclass
class Config:
    """Toolkit configuration."""

    # Chain settings
    rpc_url: str = "https://rpc.sepolia.org"
    contract_address: Optional[str] = None
    chain_id: int = SEPOLIA_CHAIN_ID

    # Metadata resolution
    ipfs_gateway_url: str = "https://ipfs.io/ipfs/"

    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            rpc_url=os.getenv("RPC_URL", "https://rpc.sepolia.org"),
            contract_address=os.getenv("CONTRACT_ADDRESS") or None,
            chain_id=int(os.getenv("CHAIN_ID", str(SEPOLIA_CHAIN_ID))),
            ipfs_gateway_url=os.getenv("IPFS_GATEWAY_URL", "https://ipfs.io/ipfs/"),
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
        )

    def validate(self) -> None:
        """Validate configuration values."""
        if not self.rpc_url:
            raise ValueError("rpc_url is required")
        if self.chain_id <= 0:
            raise ValueError("chain_id must be > 0")
        if not self.ipfs_gateway_url.startswith(("http://", "https://")):
            raise ValueError("ipfs_gateway_url must be an http(s) URL")
        if self.contract_address and not Web3.is_address(self.contract_address):
            raise ValueError(f"contract_address is not a valid address: {self.contract_address}")

    def require_contract(self) -> str:
        """Get the contract address for commands that talk to the chain.

        Raises:
            ValueError: If CONTRACT_ADDRESS is not configured
        """
        if not self.contract_address:
            raise ValueError("CONTRACT_ADDRESS environment variable is required")
        return self.contract_address
