"""
Test suite for Stockroom.

Demonstrates testing patterns for the inventory assistant:
- Loop behaviour against a scripted model (no network)
- Service rules against a throwaway SQLite database
- HTTP contracts through an in-process ASGI client
"""
