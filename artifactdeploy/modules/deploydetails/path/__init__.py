from .resolver import build_tokens, resolve_artifact_path, substitute, unresolved_tokens

__all__ = ["build_tokens", "resolve_artifact_path", "substitute", "unresolved_tokens"]
