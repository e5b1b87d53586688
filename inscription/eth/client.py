"""Web3 client for reading inscriptions from the token contract."""

import json
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, List, Optional

from web3 import Web3

from inscription.codec.metadata import data_uri_to_json
from inscription.config import Config
from inscription.log import get_logger

logger = get_logger(__name__)

ABI_RESOURCE = "abi/InscriptionNFT.json"


class ContractReadError(Exception):
    """Raised when a contract view call fails."""
    pass


@lru_cache(maxsize=None)
def get_inscription_abi() -> List[Dict[str, Any]]:
    """Get the ERC-721 inscription ABI shipped with the package.

    Only the entries this toolkit uses are included: tokenURI, ownerOf,
    safeMint and the Transfer event.
    """
    abi_text = resources.files("inscription").joinpath(ABI_RESOURCE).read_text(encoding="utf-8")
    return json.loads(abi_text)


@dataclass(frozen=True)
class TokenInspection:
    """On-chain view of a single token."""

    token_id: int
    owner: str
    uri: str
    metadata: Optional[Any]


class InscriptionContractClient:
    """Read-only client for the inscription ERC-721 contract."""

    def __init__(self, config: Config, web3: Optional[Web3] = None):
        """Initialize Web3 client.

        Args:
            config: Configuration object with RPC URL and contract address
            web3: Preconfigured Web3 instance (defaults to an HTTP provider on config.rpc_url)

        Raises:
            ValueError: If no contract address is configured
            ConnectionError: If the RPC endpoint is unreachable
        """
        self.config = config
        address = Web3.to_checksum_address(config.require_contract())
        self.web3 = web3 or Web3(Web3.HTTPProvider(config.rpc_url))

        if not self.web3.is_connected():
            raise ConnectionError(f"Failed to connect to RPC: {config.rpc_url}")

        self.contract = self.web3.eth.contract(address=address, abi=get_inscription_abi())
        logger.info(f"Connected to {config.rpc_url}, contract {address}")

    def token_uri(self, token_id: int) -> str:
        """Get the tokenURI of a token.

        Raises:
            ContractReadError: If the call reverts or the RPC fails
        """
        try:
            return self.contract.functions.tokenURI(token_id).call()
        except Exception as e:
            raise ContractReadError(f"tokenURI({token_id}) failed: {e}") from e

    def owner_of(self, token_id: int) -> str:
        """Get the owner address of a token.

        Raises:
            ContractReadError: If the call reverts or the RPC fails
        """
        try:
            return self.contract.functions.ownerOf(token_id).call()
        except Exception as e:
            raise ContractReadError(f"ownerOf({token_id}) failed: {e}") from e

    def inspect(self, token_id: int) -> TokenInspection:
        """Read owner, tokenURI and embedded metadata of a token.

        Only metadata embedded in the tokenURI is decoded; remote URIs
        leave metadata as None (use MetadataResolver for those).

        Args:
            token_id: Token to inspect

        Returns:
            TokenInspection for the token

        Raises:
            ContractReadError: If either contract call fails
        """
        owner = self.owner_of(token_id)
        uri = self.token_uri(token_id)
        return TokenInspection(
            token_id=token_id,
            owner=owner,
            uri=uri,
            metadata=data_uri_to_json(uri),
        )
