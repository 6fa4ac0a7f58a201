"""College Portal package.

Organized by feature modules (attendance, marks, fees, ...) with a thin Flask
JSON controller layer over service/repository layers. The aggregation and
bulk-upsert logic lives in plain functions that never touch the database.
"""
