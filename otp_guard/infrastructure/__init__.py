"""Infrastructure adapters (persistence, vaults, security, delivery, identity, logging)."""
