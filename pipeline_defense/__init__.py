"""
Pipeline Defense - a field technician protects a pipeline from falling
water drops and rust monsters with a rate-limited lightning zap.

Packages:
    sim: headless per-tick simulation core
    games: pygame presentation, input and audio
    models: shared primitives and enumerations
"""

__version__ = "1.0.0"
