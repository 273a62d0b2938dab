"""
Tracebit Kernel

Role-gated record management over an in-memory ledger-like state:
- Case reporting and review pipeline (reporters submit, reviewers finalize)
- Entity registry of flagged wallets with risk metadata (admin maintained)
- Errors returned as stable codes, never partial mutation
- Block-height timestamps from an injected clock
"""

__version__ = "0.1.0"
