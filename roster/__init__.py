"""Roster: multi-tenant companies, role hierarchy and access control."""
