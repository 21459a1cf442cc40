"""
Tests for the agro marketplace auth service.

Covers:

- HTTP endpoints for registration, login and profile (`test_auth.py`)
- Password hashing and session tokens (`test_security.py`)
- The authorization gate dependencies (`test_gate.py`)
- Credential and profile services against the directory (`test_services.py`)
- Database initialization and reference data (`test_db_init.py`)
- Auth event logging (`test_event_logger.py`)
"""
