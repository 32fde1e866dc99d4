from .member import on_member_join

__all__ = ["on_member_join"]
