"""Tenancy bounded context.

Determines which tenant (business client) is active in an execution
context, keeps that decision consistent across contexts sharing the same
persisted selection, and gates feature visibility and API routing on it.
"""
