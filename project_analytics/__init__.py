"""
Project analytics engine: budget forecasting, spending anomaly detection
and project risk scoring.
"""

__version__ = "1.0.0"
