from .query_executor import QueryExecutor, StateListener

__all__ = ["QueryExecutor", "StateListener"]
