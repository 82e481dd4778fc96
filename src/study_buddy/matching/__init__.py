from .merge import merge_adjacent
from .suggest import ClassmateLookup, shared_windows, suggest_matches

__all__ = ["ClassmateLookup", "merge_adjacent", "shared_windows", "suggest_matches"]
