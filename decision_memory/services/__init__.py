from decision_memory.services.results import MutationFailed, MutationOk, MutationResult

__all__ = ["MutationFailed", "MutationOk", "MutationResult"]
