from .registry import TransformerRegistry, to_list

__all__ = ["TransformerRegistry", "to_list"]
