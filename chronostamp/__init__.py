"""Set file creation/modification dates from a date encoded at the start of the filename."""

from .date import AttributePlan, ExtractionOutcome, ParsedDate, YearBound, extract, plan
