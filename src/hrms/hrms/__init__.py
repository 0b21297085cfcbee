"""HRMS package.

Organized by feature modules (attendance, reports, leave, payroll, ...) with a
thin Flask controller layer on top of service/repository layers. Services only
see repository Protocols; MySQL implementations are wired in ``container``.
"""
