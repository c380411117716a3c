"""Filename date extraction and timestamp planning.

Both halves are pure: nothing here touches the filesystem. See chronostamp.writers
for the part that actually writes timestamps.
"""

from .types import AttributePlan, ExtractionOutcome, ParsedDate, YearBound
from .parsers import extract
from .plan import plan
