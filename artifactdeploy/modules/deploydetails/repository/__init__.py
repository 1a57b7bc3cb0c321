from .selector import select_target_repository

__all__ = ["select_target_repository"]
