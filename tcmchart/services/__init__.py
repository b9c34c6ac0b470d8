# tcmchart/services/__init__.py
from .chart_service import ChartService, ChartStorageError, FileNumberChangeError

__all__ = ["ChartService", "ChartStorageError", "FileNumberChangeError"]
