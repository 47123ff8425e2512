"""Inspection Officine — record keeping for pharmacy and wholesaler compliance inspections."""

__version__ = "1.0.0"
