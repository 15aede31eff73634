"""Parsers for converting raw provider responses to FireRecord."""

from fire_finder.parsers.base import RecordParser
from fire_finder.parsers.firms_csv import FIRMSCSVParser

PARSER_MAP = {
    "firms_csv": FIRMSCSVParser(),
}

__all__ = ["PARSER_MAP", "RecordParser", "FIRMSCSVParser"]
