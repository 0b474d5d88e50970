"""Domain layer for Ringside.

Pure business logic: models, status projection, ledger rules and
transition rules. Nothing here imports from other ringside layers.
"""
