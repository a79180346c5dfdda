"""Platform adapters (subprocess execution)."""
