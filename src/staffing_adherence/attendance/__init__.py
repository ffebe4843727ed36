"""
Attendance / adherence domain.

Pure calculation modules (regulations, iso_week, forecast_domain,
roster_domain, reconcile) plus the monthly use case that wires them to the
stores in staffing_adherence.data.
"""
