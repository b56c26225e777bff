"""Serializable payloads for ledgerbook operations."""
