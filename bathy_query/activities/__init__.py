"""Pipeline entry points.

- resolve_depths: run the batch scheduler with its failure boundary
"""
