"""
Test Suite for bizledger

Test Structure:
- unit/: Unit tests mirroring src/ package structure
- integration/: CLI and configuration tests

Test Data:
All test data is synthetic.
"""
