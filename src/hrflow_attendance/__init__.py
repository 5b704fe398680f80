"""HRFlow attendance package.

Organized by feature modules (attendance, schedules, requests, reports, ...)
around a pure time-accounting core, with service/repository layers and a
thin Flask JSON controller layer on top.
"""
