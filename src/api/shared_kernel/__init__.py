"""Shared Kernel module.

Small pieces used by more than one part of the dashboard shell: the
in-process change broadcaster and the observation context that probes
attach to their events.
"""
