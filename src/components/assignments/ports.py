from src.ports.repo import AssignmentStorePort

__all__ = ["AssignmentStorePort"]
