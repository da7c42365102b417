"""Technician route sequencing and dispatch service."""
