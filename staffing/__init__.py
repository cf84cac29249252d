"""Staff scheduling application.

This package holds the models, services, serializers and views behind
the MedScheduler REST API: staff directory, departments, shift roster,
leave ledger, notifications and reporting.
"""
