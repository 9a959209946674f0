"""Exporters for VBD draft boards"""
from .csv_exporter import CSVExporter

__all__ = ['CSVExporter']
