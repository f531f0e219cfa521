from .expansion import ExpansionState, keys_for, toggle_key

__all__ = ["ExpansionState", "keys_for", "toggle_key"]
