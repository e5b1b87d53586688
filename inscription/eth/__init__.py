"""Read-only access to the inscription ERC-721 contract."""
