"""School attendance package.

Organized by feature modules (persons, attendance, leaves, windows, status,
ranking, ...) with a thin Flask controller layer on top of service and
repository layers.
"""
