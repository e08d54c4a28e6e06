"""Adapters connecting the core to storage, transports and the host daemon."""
