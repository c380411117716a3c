from .base import AppliedAttributes, AttributeWriter
from .registry import build_writer
