"""Toolkit for minting and inspecting ERC-721 inscriptions with on-chain metadata."""

__version__ = "0.1.0"
