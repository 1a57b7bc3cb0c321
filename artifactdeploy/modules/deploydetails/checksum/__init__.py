from .engine import calculate_checksums

__all__ = ["calculate_checksums"]
