"""
apiwalk Test Suite

Tests organized by layer:
- core/ - request building, executor, decoding, pluck, projection
- clients/ - Parliament + NWS clients, config, charts, CLI (fake executor)
"""
