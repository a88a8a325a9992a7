"""Tenancy domain layer: tenant configuration records and state snapshots."""
