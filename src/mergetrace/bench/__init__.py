"""
Benchmarking: timing harness (`measure`) and YAML-driven sweeps (`runner`).
"""
