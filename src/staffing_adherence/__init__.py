"""
Staffing adherence engine.

Reconciles a region's forecasted contact workload against its available
roster, one calendar day at a time, and summarizes the month.
"""

__version__ = "0.1.0"
