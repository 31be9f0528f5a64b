"""
Lambda helpers for the job processor.

Exports: parse_job_record
"""

from .event_parser import parse_job_record

__all__ = ["parse_job_record"]
