"""Resolution orchestration.

- batch_scheduler: batched, rate-limited, layer-fallback depth resolution
"""
