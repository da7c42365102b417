"""Dispatch helpers."""

from .ranking import TechnicianRanking, rank_technicians

__all__ = ["TechnicianRanking", "rank_technicians"]
