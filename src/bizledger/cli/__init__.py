"""
Command Line Interface Package

Unified CLI for reconciliation and cash-flow operations.

Command Structure:
- bizledger: Main entry point with utility commands (version, config)
- bizledger reconcile: match, allocate, batch
- bizledger cashflow: aggregate, summary, chart
"""
