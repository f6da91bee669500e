from .accommodation import Accommodation

__all__ = ["Accommodation"]
